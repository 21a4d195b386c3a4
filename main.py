#!/usr/bin/env python3
"""
Movie Favorites API server.

Usage:
    python main.py                    # Serve on 127.0.0.1:3000
    python main.py --port 8080        # Serve on another port
    python main.py --reload           # Reload on code changes
"""

import argparse
import os
import sys

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve the movies and users REST API"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "3000")),
        help="Port to listen on (default: $PORT or 3000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print(f"Server running on http://{args.host}:{args.port}")
    try:
        uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()

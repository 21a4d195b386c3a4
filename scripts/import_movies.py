#!/usr/bin/env python3
"""
Import movies from a JSON file into MongoDB.

Usage:
    python scripts/import_movies.py movies.json

The file must hold a JSON array of movie records using the API's field names
(title, description, genre, director, imageURL, isFeatured, releaseYear,
rating, cast). Records that fail validation are skipped.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv(Path(__file__).parent.parent / ".env")

from pymongo.errors import PyMongoError

from models.movie import Movie
from models.schemas import ValidationError
from db.mongodb import get_database, close_connection, init_indexes, check_connection
from db.movie_repository import MovieRepository


def load_movies(path: Path) -> List[Movie]:
    """Parse and validate movie records from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)

    if isinstance(records, dict):
        records = records.get("movies", [])

    movies = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            print(f"Warning: Skipping record {index}: not an object")
            continue
        try:
            movies.append(Movie.from_payload(record))
        except ValidationError as e:
            print(f"Warning: Skipping record {index}: {e}")
    return movies


async def import_movies(path: Path) -> bool:
    """Insert the movies found in ``path``."""
    if not path.exists():
        print(f"Error: File not found at {path}")
        return False

    movies = load_movies(path)
    print(f"Parsed {len(movies)} valid movies from {path}.")
    if not movies:
        return False

    print("\nConnecting to MongoDB...")
    db = await get_database()
    if not await check_connection():
        print("Error: Failed to connect to MongoDB.")
        print("Check MONGODB_URI in your .env file.")
        await close_connection()
        return False

    try:
        await init_indexes(db)
        repo = MovieRepository(db)
        for movie in movies:
            await repo.create(movie)
        total = await repo.get_total_count()
    except (ValidationError, PyMongoError) as e:
        print(f"Error: Import failed: {e}")
        return False
    finally:
        await close_connection()

    print("\nImport complete!")
    print(f"  - Inserted: {len(movies)} movies")
    print(f"  - Total in database: {total} movies")
    return True


def main():
    """Entry point for the import script."""
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    success = asyncio.run(import_movies(Path(sys.argv[1])))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

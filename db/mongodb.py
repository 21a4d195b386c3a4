"""MongoDB connection management using Motor (async driver)."""

import os
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE_NAME = "MovieDB"

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def get_database() -> AsyncIOMotorDatabase:
    """Get the MongoDB database instance, opening the client if needed.

    A failed ping is logged but the handle is still returned: the driver keeps
    trying to reach the server and requests fail individually until it does.
    """
    global _client, _database

    if _database is not None:
        return _database

    mongodb_uri = os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI)
    database_name = os.getenv("MONGODB_DATABASE", DEFAULT_DATABASE_NAME)

    _client = AsyncIOMotorClient(mongodb_uri)
    _database = _client[database_name]

    try:
        await _client.admin.command("ping")
        logger.info(f"Connected to MongoDB database {database_name}")
    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"MongoDB connection error: {e}")

    return _database


async def close_connection():
    """Close the MongoDB connection."""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def init_indexes(db: AsyncIOMotorDatabase):
    """Create the unique indexes the user collection relies on."""
    await db.users.create_index("username", unique=True)
    await db.users.create_index("email", unique=True)
    logger.info("MongoDB indexes created")


async def check_connection() -> bool:
    """Check if MongoDB connection is healthy."""
    if _client is None:
        return False
    try:
        await _client.admin.command("ping")
        return True
    except Exception:
        return False

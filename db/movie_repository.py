"""Movie repository for MongoDB operations."""

import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from models.movie import Movie
from models.schemas import ValidationError

logger = logging.getLogger(__name__)


class MovieRepository:
    """Repository for movie database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.movies = db.movies

    async def get_all(self) -> List[Movie]:
        """Get every movie in natural order."""
        docs = await self.movies.find().to_list(length=None)
        return [Movie.from_document(doc) for doc in docs]

    async def get_by_title(self, title: str) -> Optional[Movie]:
        """Get the first movie whose title matches exactly."""
        doc = await self.movies.find_one({"title": title})
        return Movie.from_document(doc) if doc else None

    async def create(self, movie: Movie) -> Movie:
        """Insert a movie and return it with its assigned id."""
        doc = movie.to_document()
        try:
            result = await self.movies.insert_one(doc)
        except DuplicateKeyError as e:
            logger.error(f"Failed to create movie: {e}")
            raise ValidationError(str(e)) from e
        doc["_id"] = result.inserted_id
        return Movie.from_document(doc)

    async def find_by_genre(self, genre: str) -> List[Movie]:
        """Get movies whose flat ``genre`` text matches exactly.

        Genre is stored as text only; documents holding a nested genre
        object never match.
        """
        cursor = self.movies.find({"genre": genre})
        docs = await cursor.to_list(length=None)
        return [Movie.from_document(doc) for doc in docs]

    async def find_by_director(self, director: str) -> List[Movie]:
        """Get movies by director (exact match)."""
        docs = await self.movies.find({"director": director}).to_list(length=None)
        return [Movie.from_document(doc) for doc in docs]

    async def get_total_count(self) -> int:
        """Get total number of movies in database."""
        return await self.movies.count_documents({})

"""User repository for MongoDB operations."""

import logging
from typing import List, Optional, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from models.user import User
from models.schemas import ValidationError

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations.

    Mutations address users by ObjectId and return ``None`` when no document
    matched; callers validate id format first.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db.users

    async def get_all(self) -> List[User]:
        """Get every user, passwords included."""
        docs = await self.users.find().to_list(length=None)
        return [User.from_document(doc) for doc in docs]

    async def create(self, user: User) -> User:
        """Insert a user. Duplicate username or email raises ValidationError."""
        doc = user.to_document()
        try:
            result = await self.users.insert_one(doc)
        except DuplicateKeyError as e:
            logger.error(f"Failed to create user: {e}")
            raise ValidationError(str(e)) from e
        doc["_id"] = result.inserted_id
        return User.from_document(doc)

    async def update(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        """Merge already-cast fields into a user and return the result."""
        if not fields:
            doc = await self.users.find_one({"_id": ObjectId(user_id)})
            return User.from_document(doc)
        return await self._find_and_update(user_id, {"$set": fields})

    async def add_favorite(self, user_id: str, movie_id: str) -> Optional[User]:
        """Add a movie id to a user's favorites; a repeat add is a no-op."""
        return await self._find_and_update(
            user_id, {"$addToSet": {"favoriteMovies": ObjectId(movie_id)}}
        )

    async def remove_favorite(self, user_id: str, movie_id: str) -> Optional[User]:
        """Remove a movie id from a user's favorites if present."""
        return await self._find_and_update(
            user_id, {"$pull": {"favoriteMovies": ObjectId(movie_id)}}
        )

    async def delete(self, user_id: str) -> bool:
        """Delete a user. Returns whether a document was removed."""
        result = await self.users.delete_one({"_id": ObjectId(user_id)})
        return result.deleted_count > 0

    async def get_total_count(self) -> int:
        """Get total number of users in database."""
        return await self.users.count_documents({})

    async def _find_and_update(self, user_id: str, update: Dict[str, Any]) -> Optional[User]:
        try:
            doc = await self.users.find_one_and_update(
                {"_id": ObjectId(user_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise ValidationError(str(e)) from e
        return User.from_document(doc)

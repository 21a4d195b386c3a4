from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime

from bson import ObjectId
from dataclasses_json import dataclass_json, config

from models.schemas import UserIn, UserUpdate, utc_now, validate_payload


@dataclass_json
@dataclass
class User:
    """A registered user. The password is stored and returned as given."""
    username: str
    password: str
    email: str
    id: Optional[str] = field(default=None, metadata=config(field_name="_id"))
    date_of_birth: Optional[datetime] = field(default=None, metadata=config(field_name="dateOfBirth"))
    favorite_movies: List[str] = field(default_factory=list, metadata=config(field_name="favoriteMovies"))
    created_at: Optional[datetime] = field(default=None, metadata=config(field_name="createdAt"))

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "User":
        """Validate a request body as a new User, stamping ``createdAt``."""
        return cls.from_document(validate_payload(UserIn, payload, "User").to_document())

    @staticmethod
    def update_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate the supplied fields of a partial update into a ``$set`` body."""
        return validate_payload(UserUpdate, payload, "User").to_update()

    def to_document(self) -> Dict[str, Any]:
        """Convert to MongoDB document."""
        doc = {
            "username": self.username,
            "password": self.password,
            "email": self.email,
            "dateOfBirth": self.date_of_birth,
            "favoriteMovies": [ObjectId(movie_id) for movie_id in self.favorite_movies],
            "createdAt": self.created_at or utc_now(),
        }
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return {k: v for k, v in doc.items() if v is not None}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> Optional["User"]:
        """Create User instance from MongoDB document."""
        if not doc:
            return None
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            username=doc.get("username", ""),
            password=doc.get("password", ""),
            email=doc.get("email", ""),
            date_of_birth=doc.get("dateOfBirth"),
            favorite_movies=[str(movie_id) for movie_id in doc.get("favoriteMovies", [])],
            created_at=doc.get("createdAt"),
        )

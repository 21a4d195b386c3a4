from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from bson import ObjectId
from dataclasses_json import dataclass_json, config

from models.schemas import MovieIn, validate_payload


@dataclass_json
@dataclass
class Movie:
    title: str
    id: Optional[str] = field(default=None, metadata=config(field_name="_id"))
    description: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    image_url: Optional[str] = field(default=None, metadata=config(field_name="imageURL"))
    is_featured: bool = field(default=False, metadata=config(field_name="isFeatured"))
    release_year: Optional[float] = field(default=None, metadata=config(field_name="releaseYear"))
    rating: Optional[float] = None
    cast: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Movie":
        """Validate an arbitrary request body as a new Movie.

        Raises ValidationError when ``title`` is missing or a field is invalid.
        """
        return cls.from_document(validate_payload(MovieIn, payload, "Movie").to_document())

    def to_document(self) -> Dict[str, Any]:
        """Convert to MongoDB document."""
        doc = {
            "title": self.title,
            "description": self.description,
            "genre": self.genre,
            "director": self.director,
            "imageURL": self.image_url,
            "isFeatured": self.is_featured,
            "releaseYear": self.release_year,
            "rating": self.rating,
            "cast": self.cast,
        }
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return {k: v for k, v in doc.items() if v is not None}

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> Optional["Movie"]:
        """Create Movie instance from MongoDB document."""
        if not doc:
            return None
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            title=doc.get("title", ""),
            description=doc.get("description"),
            genre=doc.get("genre"),
            director=doc.get("director"),
            image_url=doc.get("imageURL"),
            is_featured=doc.get("isFeatured", False),
            release_year=doc.get("releaseYear"),
            rating=doc.get("rating"),
            cast=doc.get("cast", []),
        )

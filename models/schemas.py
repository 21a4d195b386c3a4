"""
Request body schemas for the movies and users collections.

Bodies are validated with pydantic before anything is written to MongoDB.
Unknown keys are dropped and field names follow the stored documents
(``imageURL``, ``favoriteMovies``, ...).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError


class ValidationError(Exception):
    """A write was rejected because of a bad field or a duplicate key."""


Number = Union[int, float]
SchemaT = TypeVar("SchemaT", bound=BaseModel)


def utc_now() -> datetime:
    """Current time as the naive UTC datetime MongoDB stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_payload(schema: Type[SchemaT], payload: Dict[str, Any], model_name: str) -> SchemaT:
    """Validate a request body, reporting every failing field in one message."""
    try:
        return schema.model_validate(payload)
    except SchemaError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ValidationError(f"{model_name} validation failed: {', '.join(problems)}") from e


class DocumentSchema(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        allow_inf_nan=False,
        coerce_numbers_to_str=True,
    )


class MovieIn(DocumentSchema):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageURL")
    is_featured: bool = Field(False, alias="isFeatured")
    release_year: Optional[Number] = Field(None, alias="releaseYear")
    rating: Optional[Number] = None
    cast: List[str] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserFields(DocumentSchema):
    """Validators shared by user creation and partial updates."""

    @field_validator("date_of_birth", "created_at", check_fields=False)
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @field_validator("favorite_movies", check_fields=False)
    @classmethod
    def check_movie_ids(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        for movie_id in value or []:
            if not ObjectId.is_valid(movie_id):
                raise ValueError(f"Cast to [ObjectId] failed for value {movie_id!r}")
        return value


class UserIn(UserFields):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: str = Field(min_length=1)
    date_of_birth: Optional[datetime] = Field(None, alias="dateOfBirth")
    favorite_movies: List[str] = Field(default_factory=list, alias="favoriteMovies")
    created_at: Optional[datetime] = Field(default_factory=utc_now, alias="createdAt")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserUpdate(UserFields):
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[datetime] = Field(None, alias="dateOfBirth")
    favorite_movies: Optional[List[str]] = Field(None, alias="favoriteMovies")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    def to_update(self) -> Dict[str, Any]:
        """Fields the client actually sent, ready for ``$set``."""
        fields = self.model_dump(by_alias=True, exclude_unset=True)
        if fields.get("favoriteMovies") is not None:
            fields["favoriteMovies"] = [ObjectId(movie_id) for movie_id in fields["favoriteMovies"]]
        return fields

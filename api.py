#!/usr/bin/env python3
"""
Movie Favorites API - REST endpoints over the movies and users collections.

Run with: uvicorn api:app --reload
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

# Load .env file
load_dotenv(Path(__file__).parent / ".env")

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

from db.mongodb import get_database, close_connection, init_indexes, check_connection
from db.movie_repository import MovieRepository
from db.user_repository import UserRepository
from models.movie import Movie
from models.user import User
from models.schemas import ValidationError
from utils.object_id import is_valid_object_id, all_valid_object_ids

# Global repository instances (set during startup)
movie_repo: Optional[MovieRepository] = None
user_repo: Optional[UserRepository] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the MongoDB connection once for the life of the process."""
    global movie_repo, user_repo
    db = await get_database()
    movie_repo = MovieRepository(db)
    user_repo = UserRepository(db)
    try:
        await init_indexes(db)
    except PyMongoError as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")
    yield
    await close_connection()


app = FastAPI(
    title="Movie Favorites API",
    description="Movies, users and their favorite movies",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_movie_repo() -> MovieRepository:
    if movie_repo is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return movie_repo


def get_user_repo() -> UserRepository:
    if user_repo is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return user_repo


@app.get("/api")
def api_root():
    """API info - returns available endpoints."""
    return {
        "message": "Movie Favorites API",
        "endpoints": {
            "GET /movies": "List all movies",
            "GET /movies/{title}": "Get a movie by exact title",
            "POST /movies": "Create a movie",
            "GET /genres/{genre}": "Movies in a genre",
            "GET /directors/{name}": "Movies by a director",
            "GET /users": "List all users",
            "POST /users": "Create a user",
            "PUT /users/{id}": "Update a user",
            "POST /users/{id}/favorites/{movieId}": "Add a favorite movie",
            "DELETE /users/{id}/favorites/{movieId}": "Remove a favorite movie",
            "DELETE /users/{id}": "Delete a user",
            "GET /health": "Health check",
        },
    }


# ========== MOVIE ROUTES ==========

@app.get("/movies", response_model=List[Dict])
async def get_movies():
    """Get all movies."""
    try:
        movies = await get_movie_repo().get_all()
    except PyMongoError as e:
        logger.error(f"MongoDB query failed: {e}")
        raise HTTPException(status_code=500, detail="Server error")
    return [m.to_dict() for m in movies]


@app.get("/movies/{title}")
async def get_movie_by_title(title: str):
    """Get a movie by exact title."""
    movie = await get_movie_repo().get_by_title(title)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie.to_dict()


@app.post("/movies", status_code=201)
async def create_movie(payload: Dict[str, Any] = Body(default={})):
    """Create a movie from the request body."""
    try:
        movie = await get_movie_repo().create(Movie.from_payload(payload))
    except (ValidationError, PyMongoError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Created movie {movie.id}: {movie.title}")
    return movie.to_dict()


@app.get("/genres/{genre}")
async def get_genre(genre: str):
    """Describe a genre with the movies filed under it."""
    try:
        movies = await get_movie_repo().find_by_genre(genre)
    except PyMongoError as e:
        logger.error(f"Error fetching genre: {e}")
        raise HTTPException(status_code=500, detail="Server error")

    if not movies:
        raise HTTPException(status_code=404, detail="Genre not found")

    return {
        "genre": genre,
        "description": f"Movies in the {genre} genre",
        "examples": [m.to_dict() for m in movies],
    }


@app.get("/directors/{name}")
async def get_director(name: str):
    """Describe a director with their movies. Biographical data is not stored."""
    movies = await get_movie_repo().find_by_director(name)
    if not movies:
        raise HTTPException(status_code=404, detail="Director not found")

    return {
        "director": name,
        "bio": "Bio not stored",
        "birthYear": None,
        "deathYear": None,
        "movies": [m.to_dict() for m in movies],
    }


# ========== USER ROUTES ==========

@app.get("/users", response_model=List[Dict])
async def get_users():
    """Get all users."""
    try:
        users = await get_user_repo().get_all()
    except PyMongoError as e:
        logger.error(f"MongoDB query failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return [u.to_dict() for u in users]


@app.post("/users", status_code=201)
async def create_user(payload: Dict[str, Any] = Body(default={})):
    """Register a user from the request body."""
    try:
        user = await get_user_repo().create(User.from_payload(payload))
    except (ValidationError, PyMongoError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Created user {user.id}: {user.username}")
    return user.to_dict()


@app.put("/users/{user_id}")
async def update_user(user_id: str, payload: Dict[str, Any] = Body(default={})):
    """Merge the supplied fields into a user. Unknown ids yield null."""
    if not is_valid_object_id(user_id):
        raise HTTPException(status_code=400, detail="Invalid user ID format")

    try:
        user = await get_user_repo().update(user_id, User.update_fields(payload))
    except (ValidationError, PyMongoError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user.to_dict() if user else None


@app.post("/users/{user_id}/favorites/{movie_id}")
async def add_favorite(user_id: str, movie_id: str):
    """Add a movie to a user's favorites."""
    if not all_valid_object_ids(user_id, movie_id):
        raise HTTPException(status_code=400, detail="Invalid user or movie ID format")

    try:
        user = await get_user_repo().add_favorite(user_id, movie_id)
    except PyMongoError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user.to_dict() if user else None


@app.delete("/users/{user_id}/favorites/{movie_id}")
async def remove_favorite(user_id: str, movie_id: str):
    """Remove a movie from a user's favorites."""
    if not all_valid_object_ids(user_id, movie_id):
        raise HTTPException(status_code=400, detail="Invalid user or movie ID format")

    try:
        user = await get_user_repo().remove_favorite(user_id, movie_id)
    except PyMongoError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user.to_dict() if user else None


@app.delete("/users/{user_id}", response_class=PlainTextResponse)
async def delete_user(user_id: str):
    """Delete a user. Deleting an unknown id also reports success."""
    if not is_valid_object_id(user_id):
        raise HTTPException(status_code=400, detail="Invalid user ID format")

    try:
        deleted = await get_user_repo().delete(user_id)
    except PyMongoError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if deleted:
        logger.info(f"Deleted user {user_id}")
    return "User deleted"


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    mongodb_connected = await check_connection() if movie_repo is not None else False
    movie_count = 0
    user_count = 0

    if mongodb_connected:
        try:
            movie_count = await get_movie_repo().get_total_count()
            user_count = await get_user_repo().get_total_count()
        except PyMongoError as e:
            logger.error(f"Health check count failed: {e}")

    return {
        "status": "healthy",
        "mongodb_connected": mongodb_connected,
        "movie_count": movie_count,
        "user_count": user_count,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=int(os.getenv("PORT", "3000")))

"""Database package for MongoDB integration."""

from db.mongodb import get_database, close_connection, init_indexes, check_connection
from db.movie_repository import MovieRepository
from db.user_repository import UserRepository

__all__ = [
    "get_database",
    "close_connection",
    "init_indexes",
    "check_connection",
    "MovieRepository",
    "UserRepository",
]

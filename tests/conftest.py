import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

import api
from db.mongodb import init_indexes
from db.movie_repository import MovieRepository
from db.user_repository import UserRepository


@pytest.fixture
def mongo_db():
    db = AsyncMongoMockClient()["MovieDB"]
    asyncio.run(init_indexes(db))
    return db


@pytest.fixture
def client(mongo_db, monkeypatch):
    # Bypasses the lifespan hook, which would connect to a real server
    monkeypatch.setattr(api, "movie_repo", MovieRepository(mongo_db))
    monkeypatch.setattr(api, "user_repo", UserRepository(mongo_db))
    return TestClient(api.app)


@pytest.fixture
def new_user(client):
    def _create(username="alice", email=None, **fields):
        body = {
            "username": username,
            "password": "secret",
            "email": email or f"{username}@example.com",
            **fields,
        }
        response = client.post("/users", json=body)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def new_movie(client):
    def _create(title="Inception", **fields):
        response = client.post("/movies", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()
    return _create

import asyncio
from unittest.mock import AsyncMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

import api


def test_list_movies_empty(client):
    response = client.get("/movies")
    assert response.status_code == 200
    assert response.json() == []


def test_create_and_list_movies(client, new_movie):
    created = new_movie("Inception", director="Christopher Nolan", cast=["Leonardo DiCaprio"])
    assert created["_id"]
    assert created["isFeatured"] is False
    assert created["cast"] == ["Leonardo DiCaprio"]

    movies = client.get("/movies").json()
    assert [m["title"] for m in movies] == ["Inception"]
    assert movies[0]["_id"] == created["_id"]


def test_create_movie_without_title_is_rejected(client):
    response = client.post("/movies", json={"director": "Nolan"})
    assert response.status_code == 400
    assert "title" in response.json()["detail"]
    assert client.get("/movies").json() == []


def test_create_movie_casts_numbers(client):
    response = client.post("/movies", json={"title": "Heat", "releaseYear": "1995", "rating": 8.3})
    assert response.status_code == 201
    assert response.json()["releaseYear"] == 1995
    assert response.json()["rating"] == 8.3


def test_get_movie_by_exact_title(client, new_movie):
    new_movie("The Matrix")

    assert client.get("/movies/The Matrix").json()["title"] == "The Matrix"
    assert client.get("/movies/the matrix").status_code == 404
    assert client.get("/movies/Matrix").status_code == 404


def test_genre_lookup(client, new_movie):
    new_movie("Alien", genre="Horror")
    new_movie("The Thing", genre="Horror")
    new_movie("Up", genre="Animation")

    response = client.get("/genres/Horror")
    assert response.status_code == 200
    body = response.json()
    assert body["genre"] == "Horror"
    assert body["description"] == "Movies in the Horror genre"
    assert sorted(m["title"] for m in body["examples"]) == ["Alien", "The Thing"]


def test_genre_lookup_not_found(client, new_movie):
    new_movie("Alien", genre="Horror")
    assert client.get("/genres/Western").status_code == 404


def test_nested_genre_cannot_be_stored(client):
    response = client.post("/movies", json={"title": "Chinatown", "genre": {"name": "Noir"}})
    assert response.status_code == 400
    assert client.get("/genres/Noir").status_code == 404


def test_genre_lookup_database_error(client, monkeypatch):
    repo = AsyncMock()
    repo.find_by_genre.side_effect = ServerSelectionTimeoutError("no servers")
    monkeypatch.setattr(api, "movie_repo", repo)

    response = client.get("/genres/Drama")
    assert response.status_code == 500
    assert response.json()["detail"] == "Server error"


def test_list_movies_database_error(client, monkeypatch):
    repo = AsyncMock()
    repo.get_all.side_effect = ServerSelectionTimeoutError("no servers")
    monkeypatch.setattr(api, "movie_repo", repo)

    assert client.get("/movies").status_code == 500


def test_director_lookup(client, new_movie):
    new_movie("Memento", director="Christopher Nolan")

    body = client.get("/directors/Christopher Nolan").json()
    assert body["director"] == "Christopher Nolan"
    assert body["bio"] == "Bio not stored"
    assert body["birthYear"] is None
    assert body["deathYear"] is None
    assert [m["title"] for m in body["movies"]] == ["Memento"]

    assert client.get("/directors/Nobody").status_code == 404


def test_genre_lookup_ignores_nested_genre_documents(client, mongo_db):
    asyncio.run(mongo_db.movies.insert_one({"title": "Chinatown", "genre": {"name": "Noir"}}))

    assert client.get("/genres/Noir").status_code == 404


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "1e400"])
def test_create_movie_rejects_non_finite_numbers(client, value):
    response = client.post("/movies", json={"title": "Heat", "rating": value})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Movie validation failed: rating")
    assert client.get("/movies").json() == []

"""
pytest configuration and fixtures.
"""

from unittest import mock

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from movie_catalog.main import create_app
from movie_catalog.movie_service import MovieFields, MovieStore


@pytest.fixture
def collection():
    """An in-memory movies collection."""
    return mongomock.MongoClient().movies_test.movies


@pytest.fixture
def store(collection) -> MovieStore:
    return MovieStore(collection)


@pytest.fixture
def client(store) -> TestClient:
    """Test client over an app wired to the in-memory store."""
    return TestClient(create_app(store=store), follow_redirects=False)


@pytest.fixture
def broken_collection():
    """A collection whose every call fails as if the server were down."""
    collection = mock.MagicMock()
    error = ServerSelectionTimeoutError("localhost:27017: connection refused")
    for name in ("find", "find_one", "insert_one", "find_one_and_update", "delete_one"):
        getattr(collection, name).side_effect = error
    return collection


@pytest.fixture
def broken_client(broken_collection) -> TestClient:
    return TestClient(create_app(store=MovieStore(broken_collection)), follow_redirects=False)


@pytest.fixture
def inception(store):
    """Insert the Inception record and return it."""
    return store.insert(MovieFields(Title="Inception", Poster="p.jpg", Released="2010", Metascore=74))

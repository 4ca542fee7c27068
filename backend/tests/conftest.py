"""
Formulario Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides a fake MongoDB store so no test needs a running server.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_collection: In-memory stand-in for an AsyncCollection
    ├── fake_connection: Connected handle returning fake_collection
    ├── down_connection: Handle whose store never came up
    ├── test_client: HTTPX AsyncClient wired to fake_connection
    └── down_client: HTTPX AsyncClient wired to down_connection
"""

import os
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://localhost:1"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from formulario.exceptions import StoreUnavailableError  # noqa: E402


class FakeCollection:
    """
    Minimal async collection: insert_one assigns an ObjectId like the driver
    does (mutating the passed document) and keeps a copy of every insert.
    """

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    async def insert_one(self, document: Dict[str, Any]):
        if "_id" not in document:
            document["_id"] = ObjectId()
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)


class FakeConnection:
    """Stand-in for MongoConnection with a fixed state."""

    def __init__(self, collection: FakeCollection, state: str = "connected"):
        self.collection = collection
        self.state = state
        self.database_name = "formulario"

    async def get_collection(self):
        if self.state != "connected":
            raise StoreUnavailableError(context={"state": self.state})
        return self.collection


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def fake_connection(fake_collection):
    return FakeConnection(fake_collection)


@pytest.fixture
def down_connection(fake_collection):
    """A handle whose startup connection attempt failed."""
    return FakeConnection(fake_collection, state="failed")


async def _client_for(connection):
    from formulario.database import get_connection
    from formulario.main import app

    app.dependency_overrides[get_connection] = lambda: connection
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(fake_connection):
    """
    Provides an async HTTP test client backed by the fake store.

    Usage:
        async def test_post(test_client):
            response = await test_client.post("/api/form", json={"name": "Ana"})
            assert response.status_code == 200
    """
    async for client in _client_for(fake_connection):
        yield client


@pytest_asyncio.fixture
async def down_client(down_connection):
    """Async HTTP test client whose store connection has failed."""
    async for client in _client_for(down_connection):
        yield client

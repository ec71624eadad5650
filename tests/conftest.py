# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from catalog.main import app
from catalog.database import ProductStore, get_store


@pytest.fixture
def collection():
    return AsyncMongoMockClient()["corazonrosadb"]["products"]


@pytest.fixture
def store(collection):
    return ProductStore(collection)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()

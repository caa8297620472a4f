"""Test configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from docbridge.api.app import create_app
from docbridge.services.mongodb.client import get_client


@pytest.fixture
def mongo_client():
    """Create an in-memory Motor-compatible client."""
    return AsyncMongoMockClient()


@pytest.fixture
def app(mongo_client):
    """Create a test app backed by the in-memory client."""
    app = create_app()
    app.dependency_overrides[get_client] = lambda: mongo_client
    return app


@pytest.fixture
def client(app):
    """Create a test client."""
    with TestClient(app) as client:
        yield client

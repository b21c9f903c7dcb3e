"""
Shared fixtures: an in-memory Mongo (mongomock-motor) wired into the app through
the get_db dependency, plus logged-in users.
"""
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from helpers import auth_headers
from invoicer.core.config import settings
from invoicer.db.database import get_db
from invoicer.main import app


@pytest.fixture
def mock_db():
    """Fresh in-memory database for every test."""
    return AsyncMongoMockClient()["invoicer_test"]


@pytest.fixture
def client(mock_db, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def admin_headers(client):
    # first account on an empty store is the admin
    return auth_headers(client, "admin@example.com")


@pytest.fixture
def alice_headers(client, admin_headers):
    return auth_headers(client, "alice@example.com")


@pytest.fixture
def bob_headers(client, admin_headers):
    return auth_headers(client, "bob@example.com")

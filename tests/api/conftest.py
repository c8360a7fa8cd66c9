"""API test fixtures: the real app over a seeded in-memory store."""

from datetime import datetime, timezone

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.seed import sample_seed
from core.store import create_store

BOB = "bob@example.com"
JANE = "jane@example.com"
REFERENCE_NOW = datetime(2025, 4, 29, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_store():
    return create_store(sample_seed(REFERENCE_NOW))


@pytest.fixture
def app(api_store, config):
    """FastAPI app with actor middleware, error handlers and data/actions routes."""
    return create_app(store=api_store, config=config)


@pytest.fixture
def client(app):
    """Client acting as the primary test user."""
    return TestClient(app, raise_server_exceptions=False, headers={"X-Actor-Email": BOB})


@pytest.fixture
def jane_client(app):
    return TestClient(app, raise_server_exceptions=False, headers={"X-Actor-Email": JANE})


@pytest.fixture
def anon_client(app):
    """Client that sends no actor header."""
    return TestClient(app, raise_server_exceptions=False)

"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from blockguess.core.config import get_settings
from blockguess.core.dependencies import get_clock
from blockguess.database import Database
from blockguess.main import app

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture(autouse=True)
def admin_token(monkeypatch):
    """Configure the admin token for every API test."""
    monkeypatch.setenv("ADMIN_TOKEN", ADMIN_TOKEN)
    get_settings.cache_clear()
    yield ADMIN_TOKEN
    get_settings.cache_clear()


@pytest.fixture
async def client(test_db, clock):
    """
    HTTP client for testing API endpoints.

    Points the app at the test database and the fake clock. The lifespan is
    not run, so no real MongoDB connection or ticker is started.
    """
    original_db = Database.db
    Database.db = test_db
    app.dependency_overrides[get_clock] = lambda: clock

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.pop(get_clock, None)
    Database.db = original_db


@pytest.fixture
def admin_headers(admin_token):
    return {"X-Admin-Token": admin_token}


@pytest.fixture
async def open_round(client, admin_headers, sample_round_data):
    """A round opened through the admin API."""
    response = await client.post("/admin/rounds", json=sample_round_data, headers=admin_headers)
    assert response.status_code == 201
    return response.json()

"""
Pytest fixtures and configuration for all tests.
"""

import os
import uuid
import pytest
from typing import AsyncGenerator

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from mongomock_motor import AsyncMongoMockClient

from blockguess.database import create_indexes

# Set TEST_MONGODB_URI to run against a real MongoDB instead of the in-memory mock
TEST_DB_URI = os.getenv("TEST_MONGODB_URI")
TEST_DB_NAME = "block_guess_test"

# 2023-11-14 22:13:20 UTC
START_TIME = 1_700_000_000
DAY = 86_400


class FakeClock:
    """Controllable clock: returns `now` and can be moved forward."""

    def __init__(self, now: int = START_TIME):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += seconds
        return self.now


@pytest.fixture(scope="session")
def worker_id(request):
    """
    Return the worker ID when using pytest-xdist, otherwise 'master'.
    This allows each worker to use its own test database.
    """
    if hasattr(request.config, 'workerinput'):
        return request.config.workerinput['workerid']
    return 'master'


@pytest.fixture(scope="function")
async def test_db(worker_id) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean test database for each test.

    Uses an in-memory mongomock database unless TEST_MONGODB_URI is set.
    Indexes are created so uniqueness rules behave like production.
    """
    if not TEST_DB_URI:
        # Mock clients share one in-memory server, so each test gets its own database
        client = AsyncMongoMockClient()
        db = client[f"{TEST_DB_NAME}_{uuid.uuid4().hex}"]
        await create_indexes(db)
        yield db
        return

    client = AsyncIOMotorClient(TEST_DB_URI)
    # Use different database per worker to avoid conflicts in parallel execution
    db_name = f"{TEST_DB_NAME}_{worker_id}" if worker_id != "master" else TEST_DB_NAME
    db = client[db_name]
    await create_indexes(db)

    yield db

    # Cleanup: drop all collections after test
    collection_names = await db.list_collection_names()
    for collection_name in collection_names:
        await db[collection_name].drop()

    client.close()


@pytest.fixture
def clock():
    """Fake clock starting at START_TIME."""
    return FakeClock()


@pytest.fixture
def sample_round_data():
    """Sample round creation payload."""
    return {
        "round_number": 1,
        "duration_minutes": 10,
        "prize": "0.01 ETH",
        "block_number": 870000,
    }


@pytest.fixture
def sample_guess_data():
    """Sample guess payload."""
    return {
        "user_id": "fid:1001",
        "display_name": "satoshi",
        "guess_value": 3200,
        "avatar_url": "https://example.com/satoshi.png",
    }


@pytest.fixture
def sample_checkin_data():
    """Sample check-in payload."""
    return {
        "user_id": "fid:2002",
        "display_name": "hal",
        "avatar_url": "https://example.com/hal.png",
    }

"""
Exercise Tracker Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── exercise_payload / user_payload: Valid request bodies
    ├── database: Empty tables in a temporary SQLite file
    └── test_client: HTTPX AsyncClient wired to the FastAPI app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Must run before any `app` import: settings and the engine read these once
_DB_DIR = tempfile.mkdtemp(prefix="exercise_tracker_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def mock_db_session():
    """
    A mock async database session; tests set execute/commit behavior.

    Usage:
        mock_db_session.execute.return_value = MagicMock(rowcount=0)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def exercise_payload():
    return {
        "username": "Nguyen Van A",
        "description": "bike ride",
        "duration": "9",
        "date": "2021-09-07",
    }


@pytest.fixture
def user_payload():
    return {"username": "Nguyen Van A"}


@pytest_asyncio.fixture
async def database():
    """
    Creates the tables before the test and drops them after.

    The engine is disposed at the end so no pooled connection outlives the
    test's event loop.
    """
    from app.database import Base, create_tables, engine

    await create_tables()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/users")
            assert response.status_code == 200
    """
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

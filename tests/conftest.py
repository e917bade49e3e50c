"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from showlist.caching.accessor import CacheAccessor  # noqa: E402
from showlist.core.config.settings import Settings  # noqa: E402
from showlist.infrastructure.database.session import Database  # noqa: E402
from tests.test_fixtures.cache_factory import CacheTestFactory, FakeClock  # noqa: E402
from tests.test_fixtures.tmdb_factory import FakeTMDBClient  # noqa: E402

# pytest-asyncio runs in auto mode (see pyproject.toml)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_settings(tmp_path):
    """
    Real Settings for an isolated test run.

    - in-memory cache store (no Redis)
    - throwaway SQLite file under tmp_path
    - no retry backoff, so retry tests do not sleep
    """
    return Settings(
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        CACHE_BACKEND="memory",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'showlist-test.db'}",
        TMDB_API_KEY="test-read-token",
        TMDB_BASE_URL="https://tmdb.test/3",
        TMDB_RETRY_BASE_DELAY=0,
        TMDB_RETRY_MAX_DELAY=0,
        JWT_SECRET="test-secret-that-is-long-enough-for-hs256",
    )


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Settable clock shared by the accessor and the memory store."""
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    return CacheTestFactory.memory_store(clock)


@pytest.fixture
def failing_store():
    return CacheTestFactory.failing_store()


@pytest.fixture
def accessor(memory_store, clock):
    return CacheAccessor(memory_store, clock=clock, default_ttl=600)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def database(test_settings):
    """Fresh SQLite database with all tables created."""
    db = Database(test_settings.database)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as db_session:
        yield db_session


# ============================================================================
# Upstream Fixtures
# ============================================================================


@pytest.fixture
def fake_tmdb():
    return FakeTMDBClient()

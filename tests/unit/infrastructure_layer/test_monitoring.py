"""
Unit Tests for Health Monitoring
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from showlist.caching.accessor import CacheAccessor
from showlist.infrastructure.monitoring.health_checker import HealthChecker, HealthStatus
from tests.test_fixtures.cache_factory import CacheTestFactory, FakeClock


def _database(ok: bool) -> MagicMock:
    database = MagicMock()
    database.ping = AsyncMock(return_value=ok)
    return database


@pytest.mark.unit
class TestHealthChecker:
    async def test_all_components_healthy(self, test_settings, memory_store, accessor):
        await memory_store.connect()
        checker = HealthChecker(test_settings, accessor, _database(True))

        report = await checker.check_health()

        assert report["status"] == HealthStatus.HEALTHY.value
        assert report["components"] == {"cache": "healthy", "database": "healthy"}
        assert report["version"] == test_settings.app.APP_VERSION

    async def test_cache_outage_is_degraded(self, test_settings):
        accessor = CacheAccessor(CacheTestFactory.failing_store(), clock=FakeClock())
        checker = HealthChecker(test_settings, accessor, _database(True))

        assert (await checker.check_health())["status"] == "degraded"

    async def test_database_outage_is_unhealthy(self, test_settings, memory_store, accessor):
        await memory_store.connect()
        checker = HealthChecker(test_settings, accessor, _database(False))

        assert (await checker.check_health())["status"] == "unhealthy"

    async def test_detailed_report_includes_cache_stats(self, test_settings, memory_store, accessor):
        await memory_store.connect()
        await accessor.read("k", ttl=60)
        checker = HealthChecker(test_settings, accessor, _database(True))

        report = await checker.detailed_health_report()

        assert report["environment"] == "test"
        assert report["components"]["cache"]["stats"]["misses"] == 1
        assert report["components"]["database"] == {"status": "healthy"}

    async def test_real_database_ping(self, test_settings, accessor, database):
        checker = HealthChecker(test_settings, accessor, database)

        assert (await checker.check_health())["components"]["database"] == "healthy"

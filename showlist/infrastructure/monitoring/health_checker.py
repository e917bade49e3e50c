#!/usr/bin/env python3
"""
Health Checker Module

Health checks for the components a request depends on:
- Cache store reachability and accessor hit/miss counters
- Database connectivity

The cache is an optimization, so a cache outage reports "degraded". A
database outage reports "unhealthy".
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from showlist.caching.accessor import CacheAccessor
from showlist.core.config.settings import Settings
from showlist.core.logging import get_logger
from showlist.infrastructure.database.session import Database

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthChecker:
    """
    STAGE-H: Health check orchestration

    Usage:
        checker = HealthChecker(settings, accessor, database)

        status = await checker.check_health()
        report = await checker.detailed_health_report()
    """

    def __init__(self, settings: Settings, accessor: CacheAccessor, database: Database):
        self.settings = settings
        self._accessor = accessor
        self._database = database

    @staticmethod
    def _overall(cache_ok: bool, database_ok: bool) -> HealthStatus:
        if not database_ok:
            return HealthStatus.UNHEALTHY
        if not cache_ok:
            return HealthStatus.DEGRADED
        return HealthStatus.HEALTHY

    async def check_health(self) -> dict[str, Any]:
        """
        Quick health check.

        STAGE-H.1: Quick health status
        """
        cache_ok = await self._accessor.store.ping()
        database_ok = await self._database.ping()
        status = self._overall(cache_ok, database_ok)

        if status is not HealthStatus.HEALTHY:
            logger.warning("Health check not healthy", stage="H.1", cache=cache_ok, database=database_ok)

        return {
            "status": status.value,
            "timestamp": _timestamp(),
            "version": self.settings.app.APP_VERSION,
            "components": {
                "cache": "healthy" if cache_ok else "unhealthy",
                "database": "healthy" if database_ok else "unhealthy",
            },
        }

    async def detailed_health_report(self) -> dict[str, Any]:
        """
        Detailed health report.

        STAGE-H.2: Detailed health report
        """
        cache_health = await self._accessor.health_check()
        database_ok = await self._database.ping()
        status = self._overall(cache_health["status"] == "healthy", database_ok)

        return {
            "status": status.value,
            "timestamp": _timestamp(),
            "version": self.settings.app.APP_VERSION,
            "environment": self.settings.app.ENVIRONMENT,
            "components": {
                "cache": cache_health,
                "database": {"status": "healthy" if database_ok else "unhealthy"},
            },
        }

"""
Health Check Routes
===================

- GET /health           quick status for load balancers (503 when unhealthy)
- GET /health/detailed  component breakdown with cache hit/miss counters

A cache outage reports "degraded" with 200: every read falls through to
the origin, so the service still answers correctly.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from showlist.api.dependencies import HealthCheckerDep
from showlist.infrastructure.monitoring.health_checker import HealthStatus

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: str  # ISO 8601
    version: str | None = None
    components: dict | None = None


def _status_code(status: str) -> int:
    return 503 if status == HealthStatus.UNHEALTHY.value else 200


@router.get("", response_model=HealthResponse)
async def health_check(checker: HealthCheckerDep):
    """Quick health check."""
    report = await checker.check_health()
    return JSONResponse(status_code=_status_code(report["status"]), content=report)


@router.get("/detailed")
async def detailed_health(checker: HealthCheckerDep):
    """Detailed health report including accessor statistics."""
    report = await checker.detailed_health_report()
    return JSONResponse(status_code=_status_code(report["status"]), content=report)

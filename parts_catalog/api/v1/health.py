"""
Health check endpoints
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Response, status

from parts_catalog.api.deps import AsyncSessionDep
from parts_catalog.core.config import settings
from parts_catalog.core.database import check_database_health
from parts_catalog.schemas.common import HealthCheckResponse


router = APIRouter()

STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(session: AsyncSessionDep) -> HealthCheckResponse:
    """Basic health check"""
    database = await check_database_health(session)
    return HealthCheckResponse(
        status="ok" if database["status"] == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.version,
        database=database["status"],
        uptime=round(time.monotonic() - STARTED_AT, 3),
    )


@router.get("/health/live", response_model=Dict[str, Any])
async def liveness_probe() -> Dict[str, Any]:
    """Kubernetes liveness probe"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/ready", response_model=Dict[str, Any])
async def readiness_probe(session: AsyncSessionDep, response: Response) -> Dict[str, Any]:
    """
    Kubernetes readiness probe - checks all dependencies
    """
    database = await check_database_health(session)
    ready = database["status"] == "healthy"
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"database": database},
    }

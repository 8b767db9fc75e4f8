"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Request

from src.application.dto.responses import HealthResponse
from src.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def build_health(request: Request) -> HealthResponse:
    """Service status, uptime and the active storage backend."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        return HealthResponse(
            status="starting",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
        )

    unsynced = len(services.state.unsynced_movements)
    return HealthResponse(
        status="degraded" if unsynced else "healthy",
        version=services.settings.app_version,
        uptime_seconds=time.time() - _start_time,
        backend=services.backend,
        unsynced_movements=unsynced,
    )


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and storage backend. Status is
    ``degraded`` while movements are waiting to be synced.
    """
    return build_health(request)

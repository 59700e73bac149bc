"""
Health check API routes.
"""

from fastapi import APIRouter, Depends, Response, status

from facteur.di import Container
from facteur.presentation.api.dependencies import get_container

router = APIRouter(tags=["health"])


@router.get("/health/live", status_code=status.HTTP_200_OK)
def liveness_probe():
    """Liveness probe: the process answers."""
    return {"status": "alive"}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check_endpoint(
    response: Response,
    container: Container = Depends(get_container),
):
    """
    Readiness check.

    Returns 503 while shutting down or when the database is unreachable.
    """
    checks = {"shutdown": not container.shutdown_manager.is_shutting_down()}
    if container.uses_database:
        checks["database"] = await container.database.health_check()

    healthy = all(checks.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "unhealthy",
        "service": container.settings.APP_NAME,
        "version": container.settings.APP_VERSION,
        "storage_backend": container.settings.storage_backend,
        "checks": checks,
        "connections": container.presence.get_total_connections(),
        "uptime_seconds": container.get_uptime_seconds(),
    }

"""
Statistics API routes.
Provides operational metrics and statistics about the Facteur service.
"""

from fastapi import APIRouter, Depends

from facteur.di import Container
from facteur.presentation.api.dependencies import get_container

router = APIRouter(tags=["stats"])


@router.get("/stats")
def get_stats(container: Container = Depends(get_container)):
    """
    Get Facteur service statistics.

    Returns presence counts, delivery counters, and request counters.
    """
    stats = dict(container.stats)
    stats["start_time"] = stats["start_time"].isoformat()
    stats["uptime_seconds"] = container.get_uptime_seconds()

    rate_limiter = container.rate_limiter
    return {
        "presence": container.presence.get_stats(),
        "delivery": dict(container.event_router.stats),
        "counters": stats,
        "rate_limiting": rate_limiter.get_stats() if rate_limiter else None,
    }

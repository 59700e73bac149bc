"""
API routes for Facteur.
"""

from facteur.presentation.api.routes.contacts import router as contacts_router
from facteur.presentation.api.routes.friends import router as friends_router
from facteur.presentation.api.routes.health import router as health_router
from facteur.presentation.api.routes.messages import router as messages_router
from facteur.presentation.api.routes.stats import router as stats_router
from facteur.presentation.api.routes.websocket import router as websocket_router

__all__ = [
    "contacts_router",
    "friends_router",
    "health_router",
    "messages_router",
    "stats_router",
    "websocket_router",
]

"""
WebSocket infrastructure for Facteur.
"""

from facteur.infrastructure.websocket.event_router import EventRouter
from facteur.infrastructure.websocket.presence_registry import (
    ConnectionLimitExceeded,
    PresenceRegistry,
)

__all__ = ["ConnectionLimitExceeded", "EventRouter", "PresenceRegistry"]

"""
Connection entity - one live WebSocket session of an authenticated user.
"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Dict, Optional


def generate_connection_id() -> str:
    """Generate unique connection ID for tracking."""
    return f"conn_{uuid.uuid4().hex[:12]}"


class Connection:
    """
    Connection entity representing a live transport session.

    The owning user is fixed at construction (after authentication) and
    cannot change afterwards. Sends are serialized so events pushed to the
    same connection keep their order.

    Attributes:
        id: Unique connection identifier
        user_id: Authenticated owner
        transport: Object exposing async send_json() and close()
        connected_at: Creation timestamp
    """

    def __init__(
        self,
        user_id: str,
        transport: Any,
        connection_id: Optional[str] = None,
        connected_at: Optional[datetime] = None,
    ):
        if not user_id:
            raise ValueError("Connection requires an authenticated user_id")

        self.id: str = connection_id or generate_connection_id()
        self._user_id: str = user_id
        self.transport = transport
        self.connected_at: datetime = connected_at or datetime.utcnow()
        self._send_lock = asyncio.Lock()
        self._closed = False

    @property
    def user_id(self) -> str:
        """Owning user identity (immutable)."""
        return self._user_id

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def send(self, payload: Dict[str, Any]) -> None:
        """Push one JSON payload to the client."""
        async with self._send_lock:
            await self.transport.send_json(payload)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Close the underlying transport once."""
        if self._closed:
            return
        self._closed = True
        await self.transport.close(code=code, reason=reason)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Connection):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Connection(id={self.id}, user_id={self._user_id})"

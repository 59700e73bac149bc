"""
Presence registry: which live connections belong to which user.
"""

from threading import Lock
from typing import Any, Dict, List, Optional

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji

from facteur.domain.entities import Connection


class ConnectionLimitExceeded(Exception):
    """Raised when connection limit is exceeded."""

    def __init__(self, message: str, limit_type: str):
        super().__init__(message)
        self.limit_type = limit_type


class PresenceRegistry:
    """
    Tracks live connections per authenticated user.

    A connection is registered at most once and always under its own
    owner. Lookups return snapshots, so callers may iterate while other
    connections join or leave.
    """

    def __init__(
        self,
        max_total_connections: int = 0,
        max_connections_per_user: int = 0,
        reporter: Optional[SystemReporter] = None,
    ):
        self._by_user: Dict[str, Dict[str, Connection]] = {}
        self._owner: Dict[str, str] = {}
        self._lock = Lock()
        self.max_total_connections = max_total_connections
        self.max_connections_per_user = max_connections_per_user
        self.reporter = reporter

        if self.reporter:
            self.reporter.info(
                f"PresenceRegistry initialized (limits: total={max_total_connections}, "
                f"per_user={max_connections_per_user})",
                context="PresenceRegistry",
                verbose_level=2,
            )

    def _check_limits(self, user_id: str) -> None:
        if self.max_total_connections > 0:
            total = len(self._owner)
            if total >= self.max_total_connections:
                if self.reporter:
                    self.reporter.warning(
                        f"{Emoji.ERROR.LIMIT} Global connection limit exceeded "
                        f"(current={total}, limit={self.max_total_connections}, "
                        f"user={user_id})",
                        context="PresenceRegistry",
                        verbose_level=1,
                    )
                raise ConnectionLimitExceeded(
                    f"Global connection limit reached: {self.max_total_connections}",
                    limit_type="global",
                )

        if self.max_connections_per_user > 0:
            user_count = len(self._by_user.get(user_id, {}))
            if user_count >= self.max_connections_per_user:
                if self.reporter:
                    self.reporter.warning(
                        f"{Emoji.ERROR.LIMIT} Per-user connection limit exceeded "
                        f"(user={user_id}, current={user_count}, "
                        f"limit={self.max_connections_per_user})",
                        context="PresenceRegistry",
                        verbose_level=1,
                    )
                raise ConnectionLimitExceeded(
                    f"User connection limit reached: {self.max_connections_per_user}",
                    limit_type="per_user",
                )

    def join(self, user_id: str, connection: Connection) -> None:
        """
        Register a live connection for a user.

        Joining the same (user, connection) pair twice is a no-op.

        Raises:
            ValueError: If the connection is owned by another user
            ConnectionLimitExceeded: If a configured limit is reached
        """
        if connection.user_id != user_id:
            raise ValueError(
                f"Connection {connection.id} belongs to {connection.user_id}, "
                f"not {user_id}"
            )

        with self._lock:
            if self._owner.get(connection.id) == user_id:
                return

            self._check_limits(user_id)

            self._by_user.setdefault(user_id, {})[connection.id] = connection
            self._owner[connection.id] = user_id
            user_conns = len(self._by_user[user_id])
            total = len(self._owner)

        if self.reporter:
            self.reporter.info(
                f"{Emoji.NETWORK.CONNECTED} Connection joined: user={user_id}, "
                f"connection={connection.id}, user_conns={user_conns}, total={total}",
                context="PresenceRegistry",
                verbose_level=2,
            )

    def leave(self, connection: Connection) -> bool:
        """
        Unregister a connection.

        Returns:
            True if it was registered, False if unknown (no-op)
        """
        with self._lock:
            user_id = self._owner.pop(connection.id, None)
            if user_id is None:
                return False

            user_conns = self._by_user.get(user_id, {})
            user_conns.pop(connection.id, None)
            if not user_conns:
                self._by_user.pop(user_id, None)
            remaining = len(user_conns)
            total = len(self._owner)

        if self.reporter:
            self.reporter.info(
                f"{Emoji.NETWORK.DISCONNECT} Connection left: user={user_id}, "
                f"connection={connection.id}, user_conns={remaining}, total={total}",
                context="PresenceRegistry",
                verbose_level=2,
            )
        return True

    def connections_for(self, user_id: str) -> List[Connection]:
        """Snapshot of a user's live connections (empty if offline)."""
        with self._lock:
            return list(self._by_user.get(user_id, {}).values())

    def all_connections(self) -> List[Connection]:
        """Snapshot of every live connection."""
        with self._lock:
            return [
                conn for conns in self._by_user.values() for conn in conns.values()
            ]

    def is_online(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._by_user

    def online_users(self) -> List[str]:
        with self._lock:
            return list(self._by_user.keys())

    def get_total_connections(self) -> int:
        """Get total number of active connections."""
        with self._lock:
            return len(self._owner)

    def get_user_count(self) -> int:
        """Get number of users with at least one live connection."""
        with self._lock:
            return len(self._by_user)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "total_connections": len(self._owner),
                "online_users": len(self._by_user),
                "max_total_connections": self.max_total_connections,
                "max_connections_per_user": self.max_connections_per_user,
            }

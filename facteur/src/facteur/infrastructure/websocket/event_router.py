"""
Event router: pushes outbound events to a user's live connections.
"""

import asyncio
from typing import Optional

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji

from facteur.domain.entities import Connection
from facteur.domain.events import OutboundEvent
from facteur.domain.exceptions import DeliveryFailure
from facteur.domain.services import DeliveryReport, IEventRouter
from facteur.infrastructure.websocket.presence_registry import PresenceRegistry


class EventRouter(IEventRouter):
    """
    Best-effort live delivery.

    The event is serialized once and pushed to all of the recipient's
    connections concurrently. A connection whose push fails is evicted
    from presence and closed; the failure never reaches the caller.
    """

    def __init__(
        self,
        presence: PresenceRegistry,
        reporter: Optional[SystemReporter] = None,
    ):
        self.presence = presence
        self.reporter = reporter
        self.stats = {
            "events_delivered": 0,
            "delivery_failures": 0,
            "offline_deliveries": 0,
        }

    async def deliver(
        self,
        recipient_id: str,
        event: OutboundEvent,
        exclude_connection_id: Optional[str] = None,
    ) -> DeliveryReport:
        report = DeliveryReport(recipient_id=recipient_id)
        targets = [
            conn
            for conn in self.presence.connections_for(recipient_id)
            if conn.id != exclude_connection_id
        ]

        if not targets:
            self.stats["offline_deliveries"] += 1
            if self.reporter:
                self.reporter.debug(
                    f"No live connection for user={recipient_id}, "
                    f"event={event.type} left to storage",
                    context="EventRouter",
                    verbose_level=3,
                )
            return report

        payload = event.to_wire()
        report.attempted = len(targets)

        results = await asyncio.gather(
            *(self._push(conn, payload) for conn in targets)
        )

        for conn, failure in zip(targets, results):
            if failure is None:
                report.delivered += 1
            else:
                report.failed.append(conn.id)
                await self._evict(conn, failure)

        self.stats["events_delivered"] += report.delivered
        self.stats["delivery_failures"] += len(report.failed)

        if self.reporter:
            self.reporter.debug(
                f"{Emoji.NETWORK.SEND} Delivered {event.type} to user={recipient_id} "
                f"({report.delivered}/{report.attempted})",
                context="EventRouter",
                verbose_level=3,
            )

        return report

    async def broadcast(self, event: OutboundEvent) -> int:
        """Push an event to every live connection. Returns deliveries."""
        delivered = 0
        for user_id in self.presence.online_users():
            report = await self.deliver(user_id, event)
            delivered += report.delivered
        return delivered

    async def _push(
        self, connection: Connection, payload: dict
    ) -> Optional[DeliveryFailure]:
        try:
            await connection.send(payload)
            return None
        except Exception as e:
            return DeliveryFailure(
                f"Push to {connection.id} failed: {e}",
                connection_id=connection.id,
            )

    async def _evict(self, connection: Connection, failure: DeliveryFailure) -> None:
        if self.reporter:
            self.reporter.warning(
                f"{Emoji.NETWORK.DISCONNECT} {failure.message}; evicting "
                f"connection of user={connection.user_id}",
                context="EventRouter",
                verbose_level=1,
            )

        self.presence.leave(connection)
        try:
            await connection.close(code=1011, reason="Delivery failed")
        except Exception as e:
            if self.reporter:
                self.reporter.debug(
                    f"Close after failed push raised: {e}",
                    context="EventRouter",
                    verbose_level=3,
                )

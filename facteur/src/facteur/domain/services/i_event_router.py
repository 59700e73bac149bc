"""
Event router interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from facteur.domain.events import OutboundEvent


@dataclass
class DeliveryReport:
    """
    Outcome of one live delivery.

    Attributes:
        recipient_id: Target user
        attempted: Live connections the event was pushed to
        delivered: Pushes that succeeded
        failed: Connection ids whose push failed (evicted afterwards)
    """

    recipient_id: str
    attempted: int = 0
    delivered: int = 0
    failed: List[str] = field(default_factory=list)

    @property
    def was_online(self) -> bool:
        return self.attempted > 0


class IEventRouter(ABC):
    """Delivers events to every live connection of a user, best effort."""

    @abstractmethod
    async def deliver(
        self,
        recipient_id: str,
        event: OutboundEvent,
        exclude_connection_id: Optional[str] = None,
    ) -> DeliveryReport:
        """
        Push an event to the recipient's live connections.

        Never raises for push failures; an offline recipient is a no-op.

        Args:
            recipient_id: Target user identity
            event: Event to push
            exclude_connection_id: Connection to skip (the originator)

        Returns:
            DeliveryReport
        """

"""
Message entity - a persisted direct message.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from facteur.domain.value_objects import MediaReference


@dataclass(frozen=True)
class Message:
    """
    Immutable direct message.

    Ordering key is (created_at, sequence); sequence breaks ties between
    messages created within the same clock tick.

    Attributes:
        sender_id: Author identity
        receiver_id: Recipient identity
        content: Text body, possibly empty when media is attached
        media: Optional media reference
        created_at: Server-assigned creation time
        sequence: Insertion order within the process
        id: Unique message identifier
    """

    sender_id: str
    receiver_id: str
    content: str = ""
    media: Optional[MediaReference] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    sequence: int = 0
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def sort_key(self) -> tuple:
        return (self.created_at, self.sequence)

    def involves(self, user_a: str, user_b: str) -> bool:
        """True if the message was exchanged between the two users."""
        return {self.sender_id, self.receiver_id} == {user_a, user_b}

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (field names of the persisted document)."""
        media = self.media.to_dict() if self.media else {
            "mediaUrl": None,
            "mediaType": None,
            "thumbnailUrl": None,
        }
        return {
            "id": self.id,
            "sender": self.sender_id,
            "receiver": self.receiver_id,
            "content": self.content,
            **media,
            "timestamp": self.created_at.isoformat(),
        }

"""
Outbound WebSocket event schemas.

Serialized with camelCase keys via to_wire().
"""

from typing import Any, ClassVar, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from facteur.domain.entities import Message


class OutboundEvent(BaseModel):
    """Base class for server-to-client events."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    exclude_none: ClassVar[bool] = False

    type: str

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dictionary using wire field names."""
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=self.exclude_none
        )


class _MessagePayload(OutboundEvent):
    """Fields of a persisted message."""

    id: str
    sender: str
    receiver: str
    content: str
    media_url: Optional[str] = Field(None, alias="mediaUrl")
    media_type: Optional[str] = Field(None, alias="mediaType")
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    timestamp: str

    @classmethod
    def from_message(cls, message: Message):
        return cls(**message.to_dict())


class ReceiveMessageEvent(_MessagePayload):
    """Pushed to the receiver's live connections."""

    type: Literal["receiveMessage"] = "receiveMessage"


class MessageSentEvent(_MessagePayload):
    """Acknowledgement returned to the sending connection."""

    type: Literal["messageSent"] = "messageSent"


class NewFriendRequestEvent(OutboundEvent):
    """Pushed to the receiver of a friend request."""

    type: Literal["newFriendRequest"] = "newFriendRequest"
    sender_id: str = Field(..., alias="senderId")
    username: Optional[str] = None


class FriendRequestSentEvent(OutboundEvent):
    """Acknowledgement returned to the requester."""

    type: Literal["friendRequestSent"] = "friendRequestSent"
    receiver_id: str = Field(..., alias="receiverId")


class FriendRequestAcceptedEvent(OutboundEvent):
    """
    Pushed to both parties of an accepted request.

    user_id is the other party from the recipient's point of view;
    request_id identifies the request (the requester's id).
    """

    type: Literal["friendRequestAccepted"] = "friendRequestAccepted"
    user_id: str = Field(..., alias="userId")
    request_id: str = Field(..., alias="requestId")


class FriendRequestDeclinedEvent(OutboundEvent):
    """Acknowledgement returned to the user who declined."""

    type: Literal["friendRequestDeclined"] = "friendRequestDeclined"
    request_id: str = Field(..., alias="requestId")


class PingEvent(OutboundEvent):
    """Heartbeat probe."""

    type: Literal["ping"] = "ping"


class PongEvent(OutboundEvent):
    """Answer to a client ping."""

    type: Literal["pong"] = "pong"


class ShutdownEvent(OutboundEvent):
    """Sent to every connection before the server closes it."""

    type: Literal["shutdown"] = "shutdown"
    message: str = "Server is shutting down"
    code: int = 1001


class ErrorEvent(OutboundEvent):
    """Error reported to the originating connection only."""

    exclude_none: ClassVar[bool] = True

    type: Literal["error"] = "error"
    code: str
    message: str
    request_type: Optional[str] = Field(None, alias="requestType")
    errors: Optional[List[str]] = None
    retry_after_seconds: Optional[int] = Field(None, alias="retryAfterSeconds")

"""
Inbound WebSocket event schemas.

Every frame sent by a client is a JSON object tagged by "type". Frames are
validated into one of these variants before reaching a use case.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class InboundEventBase(BaseModel):
    """Common configuration: camelCase wire names, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("receiver_id", "request_id", mode="before", check_fields=False)
    @classmethod
    def ids_as_strings(cls, v: Any) -> Any:
        # Clients may send numeric ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class SendMessageEvent(InboundEventBase):
    """sendMessage{receiverId, content, mediaUrl?, mediaType?, thumbnailUrl?}"""

    type: Literal["sendMessage"]
    receiver_id: str = Field(..., alias="receiverId", min_length=1)
    content: Optional[str] = Field(None)
    media_url: Optional[str] = Field(None, alias="mediaUrl")
    media_type: Optional[str] = Field(None, alias="mediaType")
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")


class SendFriendRequestEvent(InboundEventBase):
    """sendFriendRequest{receiverId}"""

    type: Literal["sendFriendRequest"]
    receiver_id: str = Field(..., alias="receiverId", min_length=1)


class AcceptFriendRequestEvent(InboundEventBase):
    """acceptFriendRequest{requestId} - requestId is the requester's id."""

    type: Literal["acceptFriendRequest"]
    request_id: str = Field(..., alias="requestId", min_length=1)


class DeclineFriendRequestEvent(InboundEventBase):
    """declineFriendRequest{requestId}"""

    type: Literal["declineFriendRequest"]
    request_id: str = Field(..., alias="requestId", min_length=1)


class PingEvent(InboundEventBase):
    """Application-level keepalive."""

    type: Literal["ping"]


InboundEvent = Annotated[
    Union[
        SendMessageEvent,
        SendFriendRequestEvent,
        AcceptFriendRequestEvent,
        DeclineFriendRequestEvent,
        PingEvent,
    ],
    Field(discriminator="type"),
]

inbound_event_adapter: TypeAdapter = TypeAdapter(InboundEvent)

INBOUND_EVENT_TYPES = frozenset(
    {
        "sendMessage",
        "sendFriendRequest",
        "acceptFriendRequest",
        "declineFriendRequest",
        "ping",
    }
)

"""
Event schemas exchanged over live connections.
"""

from facteur.domain.events.inbound import (
    INBOUND_EVENT_TYPES,
    AcceptFriendRequestEvent,
    DeclineFriendRequestEvent,
    InboundEvent,
    SendFriendRequestEvent,
    SendMessageEvent,
    inbound_event_adapter,
)
from facteur.domain.events.inbound import PingEvent as InboundPingEvent
from facteur.domain.events.outbound import (
    ErrorEvent,
    FriendRequestAcceptedEvent,
    FriendRequestDeclinedEvent,
    FriendRequestSentEvent,
    MessageSentEvent,
    NewFriendRequestEvent,
    OutboundEvent,
    PingEvent,
    PongEvent,
    ReceiveMessageEvent,
    ShutdownEvent,
)

__all__ = [
    # Inbound
    "InboundEvent",
    "INBOUND_EVENT_TYPES",
    "inbound_event_adapter",
    "SendMessageEvent",
    "SendFriendRequestEvent",
    "AcceptFriendRequestEvent",
    "DeclineFriendRequestEvent",
    "InboundPingEvent",
    # Outbound
    "OutboundEvent",
    "ReceiveMessageEvent",
    "MessageSentEvent",
    "NewFriendRequestEvent",
    "FriendRequestSentEvent",
    "FriendRequestAcceptedEvent",
    "FriendRequestDeclinedEvent",
    "PingEvent",
    "PongEvent",
    "ShutdownEvent",
    "ErrorEvent",
]

"""
Application use cases for Facteur.
"""

from facteur.application.use_cases.authenticate_connection import (
    AuthenticateConnectionUseCase,
)
from facteur.application.use_cases.event_validation import (
    ParseInboundEventUseCase,
    ParseResult,
)
from facteur.application.use_cases.get_conversation import GetConversationUseCase
from facteur.application.use_cases.handle_inbound_event import (
    HandleInboundEventUseCase,
)
from facteur.application.use_cases.manage_relationship import (
    ManageRelationshipUseCase,
)
from facteur.application.use_cases.send_message import (
    SendMessageUseCase,
    media_from_fields,
)

__all__ = [
    "AuthenticateConnectionUseCase",
    "GetConversationUseCase",
    "HandleInboundEventUseCase",
    "ManageRelationshipUseCase",
    "ParseInboundEventUseCase",
    "ParseResult",
    "SendMessageUseCase",
    "media_from_fields",
]

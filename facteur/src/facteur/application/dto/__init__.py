"""
Data transfer objects for Facteur.
"""

from facteur.application.dto.message_dto import (
    ConversationPage,
    PaginationInfo,
    SendMessageRequest,
)
from facteur.application.dto.relationship_dto import (
    ContactsPage,
    ContactsPagination,
    FriendRequestBody,
    RequestDecisionBody,
)

__all__ = [
    "ContactsPage",
    "ContactsPagination",
    "ConversationPage",
    "FriendRequestBody",
    "PaginationInfo",
    "RequestDecisionBody",
    "SendMessageRequest",
]

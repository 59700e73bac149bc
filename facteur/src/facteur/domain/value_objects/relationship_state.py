"""
Relationship state between an ordered pair of users.
"""

from enum import Enum


class RelationshipState(Enum):
    """
    State of the pair (A, B) seen from A.

    NONE: no link
    PENDING_OUTGOING: A requested B, awaiting B
    PENDING_INCOMING: B requested A, awaiting A
    CONTACTS: confirmed on both sides
    """

    NONE = "none"
    PENDING_OUTGOING = "pending_outgoing"
    PENDING_INCOMING = "pending_incoming"
    CONTACTS = "contacts"

    @property
    def is_pending(self) -> bool:
        return self in (
            RelationshipState.PENDING_OUTGOING,
            RelationshipState.PENDING_INCOMING,
        )

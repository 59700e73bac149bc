"""
Contact and friend-request exceptions.
"""

from facteur.domain.exceptions.base import FacteurError


class RelationshipError(FacteurError):
    """Base exception for relationship transitions."""

    code = "RELATIONSHIP_ERROR"

    def __init__(self, message: str, user_id: str = None, other_id: str = None):
        super().__init__(message)
        self.user_id = user_id
        self.other_id = other_id


class AlreadyPendingError(RelationshipError):
    """Raised when a request between the two users is already pending."""

    code = "ALREADY_PENDING"


class AlreadyContactsError(RelationshipError):
    """Raised when the two users are already contacts."""

    code = "ALREADY_CONTACTS"


class NoSuchRequestError(RelationshipError):
    """Raised when accepting or declining a request that does not exist."""

    code = "NO_SUCH_REQUEST"


class UnknownUserError(RelationshipError):
    """Raised when one side of the relationship cannot be resolved."""

    code = "UNKNOWN_USER"


class SelfRelationshipError(RelationshipError):
    """Raised when a user targets themselves."""

    code = "SELF_RELATIONSHIP"

"""
Domain exceptions for Facteur.
"""

from facteur.domain.exceptions.auth_exceptions import (
    AuthenticationError,
    InvalidCredentialError,
    MissingCredentialError,
    TokenExpiredError,
)
from facteur.domain.exceptions.base import FacteurError
from facteur.domain.exceptions.delivery_exceptions import DeliveryFailure
from facteur.domain.exceptions.ingest_exceptions import (
    IngestError,
    InvalidPayloadError,
    StorageFailureError,
)
from facteur.domain.exceptions.relationship_exceptions import (
    AlreadyContactsError,
    AlreadyPendingError,
    NoSuchRequestError,
    RelationshipError,
    SelfRelationshipError,
    UnknownUserError,
)
from facteur.domain.exceptions.storage_exceptions import StorageError

__all__ = [
    # Base
    "FacteurError",
    # Auth
    "AuthenticationError",
    "MissingCredentialError",
    "InvalidCredentialError",
    "TokenExpiredError",
    # Ingest
    "IngestError",
    "InvalidPayloadError",
    "StorageFailureError",
    # Relationship
    "RelationshipError",
    "AlreadyPendingError",
    "AlreadyContactsError",
    "NoSuchRequestError",
    "UnknownUserError",
    "SelfRelationshipError",
    # Delivery / storage
    "DeliveryFailure",
    "StorageError",
]

"""
Message ingest exceptions.
"""

from typing import List, Optional

from facteur.domain.exceptions.base import FacteurError


class IngestError(FacteurError):
    """Base exception for message ingest errors."""

    code = "INGEST_ERROR"


class InvalidPayloadError(IngestError):
    """Raised when an inbound payload fails validation."""

    code = "INVALID_PAYLOAD"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class StorageFailureError(IngestError):
    """Raised when persisting a message fails. Nothing was delivered."""

    code = "STORAGE_FAILURE"

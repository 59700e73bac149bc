"""
Persistence exceptions raised by repository implementations.
"""

from facteur.domain.exceptions.base import FacteurError


class StorageError(FacteurError):
    """Raised when the datastore rejects or fails an operation."""

    code = "STORAGE_ERROR"

"""
Live delivery exceptions.

Never propagated past the event router.
"""

from facteur.domain.exceptions.base import FacteurError


class DeliveryFailure(FacteurError):
    """Raised when a push to one live connection fails."""

    code = "DELIVERY_FAILURE"

    def __init__(self, message: str, connection_id: str = None):
        super().__init__(message)
        self.connection_id = connection_id

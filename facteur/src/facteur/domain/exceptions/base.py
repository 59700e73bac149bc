"""
Base exception for Facteur domain errors.
"""


class FacteurError(Exception):
    """
    Base exception for all Facteur domain errors.

    Attributes:
        message: Human readable description
        code: Stable machine readable error code (sent to clients)
    """

    code = "FACTEUR_ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

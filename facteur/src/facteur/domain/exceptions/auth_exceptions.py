"""
Authentication exceptions.
"""

from facteur.domain.exceptions.base import FacteurError


class AuthenticationError(FacteurError):
    """Base exception for authentication errors."""

    code = "AUTHENTICATION_ERROR"


class MissingCredentialError(AuthenticationError):
    """Raised when no bearer credential was supplied."""

    code = "MISSING_CREDENTIAL"

    def __init__(self, message: str = "No credential supplied"):
        super().__init__(message)


class InvalidCredentialError(AuthenticationError):
    """Raised when the token signature, format or claims are invalid."""

    code = "INVALID_CREDENTIAL"


class TokenExpiredError(InvalidCredentialError):
    """Raised when JWT token has expired."""

    code = "TOKEN_EXPIRED"

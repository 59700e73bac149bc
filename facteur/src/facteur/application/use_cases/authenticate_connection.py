"""
Use case for authenticating WebSocket and HTTP callers.
"""

from typing import Optional

from facteur.domain.auth import TokenPayload
from facteur.domain.exceptions import (
    InvalidCredentialError,
    MissingCredentialError,
    TokenExpiredError,
)
from facteur.infrastructure.auth import JWTVerifier


class AuthenticateConnectionUseCase:
    """
    Resolves a bearer credential to a user identity.

    Invoked once per WebSocket handshake and once per HTTP request.
    """

    def __init__(self, jwt_verifier: JWTVerifier):
        """
        Initialize use case.

        Args:
            jwt_verifier: JWT token verifier
        """
        self.jwt_verifier = jwt_verifier

    def verify(self, token: Optional[str]) -> TokenPayload:
        """
        Verify a credential and return its claims.

        Raises:
            MissingCredentialError: If no token was supplied
            TokenExpiredError: If the token has expired
            InvalidCredentialError: If the token is malformed or forged
        """
        if token is None or not token.strip():
            raise MissingCredentialError()

        try:
            return self.jwt_verifier.verify_token(token.strip())
        except ValueError as e:
            if "expired" in str(e).lower():
                raise TokenExpiredError(str(e))
            raise InvalidCredentialError(str(e))

    def execute(self, token: Optional[str]) -> str:
        """
        Authenticate a credential.

        Args:
            token: Raw JWT (query parameter or bearer header)

        Returns:
            Authenticated user id
        """
        return self.verify(token).user_id

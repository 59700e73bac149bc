"""
JWT verification infrastructure for Facteur.
"""

from typing import Optional, Sequence

import jwt

from facteur.domain.auth import TokenPayload


class JWTVerifier:
    """
    JWT token verifier.

    Verifies signature and expiry of bearer tokens against the shared
    secret and extracts the subject claim as the user identity.

    Attributes:
        secret: JWT secret key for verification
        algorithm: JWT algorithm (default: HS256)
        subject_claims: Claim names tried in order for the user identity
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        subject_claims: Sequence[str] = ("sub", "id"),
        leeway: int = 0,
    ):
        """
        Initialize JWT verifier.

        Args:
            secret: JWT secret key
            algorithm: JWT algorithm (default: HS256)
            subject_claims: Claims holding the user id, first match wins
            leeway: Clock skew tolerance in seconds
        """
        if not secret:
            raise ValueError("JWT secret cannot be empty")

        self.secret = secret
        self.algorithm = algorithm
        self.subject_claims = tuple(subject_claims)
        self.leeway = leeway

    def verify_token(self, token: str) -> TokenPayload:
        """
        Verify JWT token and return payload.

        Args:
            token: JWT token string

        Returns:
            Validated TokenPayload

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

        user_id = self._extract_subject(payload)
        if user_id is None:
            raise ValueError("Invalid token: no subject claim")

        return TokenPayload(
            user_id=user_id,
            exp=payload["exp"],
            iat=payload.get("iat"),
            username=payload.get("username"),
        )

    def _extract_subject(self, payload: dict) -> Optional[str]:
        for claim in self.subject_claims:
            value = payload.get(claim)
            if value is not None and str(value).strip():
                return str(value)
        return None

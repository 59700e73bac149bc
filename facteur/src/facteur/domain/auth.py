"""
Authentication domain models for Facteur.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """
    Verified JWT claims.

    Attributes:
        user_id: Stable user identity taken from the subject claim
        exp: Token expiration timestamp (Unix epoch)
        iat: Token issued at timestamp (Unix epoch)
        username: Display name claim, when the issuer includes one
    """

    user_id: str = Field(..., min_length=1, description="Subject claim")
    exp: int = Field(..., description="Expiration time (Unix timestamp)")
    iat: Optional[int] = Field(None, description="Issued at time (Unix timestamp)")
    username: Optional[str] = Field(None, description="Display name claim")

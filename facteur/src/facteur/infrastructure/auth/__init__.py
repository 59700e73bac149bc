"""
Authentication infrastructure for Facteur.
"""

from facteur.infrastructure.auth.jwt_verifier import JWTVerifier

__all__ = ["JWTVerifier"]

"""
Integration tests for JWTVerifier.

Tests JWT token verification with real tokens.

Usage:
    python facteur/tests/integration/infrastructure/test_jwt_verifier.py
    pytest facteur/tests/integration/infrastructure/test_jwt_verifier.py
"""

import time

import jwt
from shared.tests import LaborantTest

from facteur.domain.auth import TokenPayload
from facteur.infrastructure.auth import JWTVerifier


class TestJWTVerifier(LaborantTest):
    """Integration tests for JWTVerifier."""

    component_name = "facteur"
    test_category = "integration"

    SECRET_KEY = "test-secret-key-for-integration-tests"
    ALGORITHM = "HS256"

    def _create_token(self, claims: dict, expires_in: int = 3600, secret: str = None) -> str:
        """Create a real JWT token for testing."""
        now = int(time.time())
        payload = {"iat": now, "exp": now + expires_in, **claims}
        return jwt.encode(payload, secret or self.SECRET_KEY, algorithm=self.ALGORITHM)

    # ================================================================
    # Token verification tests
    # ================================================================

    def test_verify_valid_token(self):
        """Test verifying a valid JWT token."""
        self.reporter.info("Testing valid token verification", context="Test")

        verifier = JWTVerifier(secret=self.SECRET_KEY, algorithm=self.ALGORITHM)
        token = self._create_token({"sub": "1", "username": "alice"})

        payload = verifier.verify_token(token)

        assert isinstance(payload, TokenPayload)
        assert payload.user_id == "1"
        assert payload.username == "alice"
        assert payload.exp > int(time.time())

    def test_numeric_id_claim(self):
        """Test the id claim is used when sub is absent."""
        verifier = JWTVerifier(secret=self.SECRET_KEY)
        token = self._create_token({"id": 2})

        assert verifier.verify_token(token).user_id == "2"

    def test_verify_expired_token(self):
        self.reporter.info("Testing expired token verification", context="Test")

        verifier = JWTVerifier(secret=self.SECRET_KEY)
        token = self._create_token({"sub": "1"}, expires_in=-10)

        try:
            verifier.verify_token(token)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "expired" in str(e).lower()

    def test_leeway_accepts_recently_expired(self):
        verifier = JWTVerifier(secret=self.SECRET_KEY, leeway=60)
        token = self._create_token({"sub": "1"}, expires_in=-10)

        assert verifier.verify_token(token).user_id == "1"

    def test_wrong_secret(self):
        verifier = JWTVerifier(secret=self.SECRET_KEY)
        token = self._create_token({"sub": "1"}, secret="another-secret-key-of-decent-length")

        try:
            verifier.verify_token(token)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "Invalid token" in str(e)

    def test_missing_exp(self):
        verifier = JWTVerifier(secret=self.SECRET_KEY)
        token = jwt.encode({"sub": "1"}, self.SECRET_KEY, algorithm=self.ALGORITHM)

        try:
            verifier.verify_token(token)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "Invalid token" in str(e)

    def test_missing_subject(self):
        verifier = JWTVerifier(secret=self.SECRET_KEY)
        token = self._create_token({"username": "alice"})

        try:
            verifier.verify_token(token)
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "subject" in str(e)

    def test_malformed_token(self):
        verifier = JWTVerifier(secret=self.SECRET_KEY)

        try:
            verifier.verify_token("not-a-jwt")
            assert False, "Should have raised ValueError"
        except ValueError:
            pass

    def test_empty_secret_rejected(self):
        try:
            JWTVerifier(secret="")
            assert False, "Should have raised ValueError"
        except ValueError:
            pass


if __name__ == "__main__":
    TestJWTVerifier.run_as_main()

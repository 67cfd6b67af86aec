# =============================================================================
# tests/test_security.py - Password Hashing and Token Tests
# =============================================================================
# Run with: pytest tests/test_security.py -v
# =============================================================================

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from lib.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    """Tests for bcrypt helpers."""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("123456")

        assert hashed != "123456"
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = hash_password("123456")
        assert verify_password("123456", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("123456")
        assert verify_password("654321", hashed) is False

    def test_same_password_hashes_differently(self):
        """Each hash gets its own salt."""
        assert hash_password("123456") != hash_password("123456")

    @pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash"])
    def test_missing_or_malformed_hash_never_matches(self, stored):
        assert verify_password("123456", stored) is False


class TestAccessTokens:
    """Tests for JWT creation and verification."""

    def test_round_trip_claims(self):
        user_id = uuid4()
        token = create_access_token(user_id, "jorge@gmail.com", "USER")

        claims = decode_access_token(token)

        assert claims["sub"] == str(user_id)
        assert claims["email"] == "jorge@gmail.com"
        assert claims["role"] == "USER"
        assert claims["aud"] == settings.JWT_AUDIENCE
        assert claims["exp"] > claims["iat"]

    def test_default_lifetime(self):
        claims = decode_access_token(create_access_token(uuid4(), None, "USER"))
        assert claims["exp"] - claims["iat"] == settings.access_token_expire_seconds

    def test_expired_token_rejected(self):
        token = create_access_token(uuid4(), None, "USER", expires_delta=timedelta(seconds=-10))

        with pytest.raises(ExpiredSignatureError):
            decode_access_token(token)

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "aud": settings.JWT_AUDIENCE},
            "some-other-secret-key-entirely",
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_wrong_audience_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "aud": "another-app"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(JWTError):
            decode_access_token("not.a.token")

# =============================================================================
# lib/security.py - Password Hashing and Access Tokens
# =============================================================================
# Stateless authentication primitives:
# - bcrypt for password hashes (stored in users.password_hash)
# - python-jose for signing and verifying HS256 access tokens
#
# The FastAPI dependency that reads the bearer token lives in
# app/auth/dependencies.py; this module has no web framework imports.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
from jose import jwt

from app.config import settings
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    Returns:
        The bcrypt hash as a utf-8 string (includes salt and cost)
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str | None) -> bool:
    """
    Check a plain password against a stored bcrypt hash.

    A missing or malformed hash never matches.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# =============================================================================
# Access Tokens
# =============================================================================

def create_access_token(
    user_id: str | UUID,
    email: str | None,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token.

    Claims:
        sub: user id
        email: user email (informational)
        role: USER or ADMIN, read by the admin guard
        aud: settings.JWT_AUDIENCE
        iat / exp: issue and expiry timestamps

    Args:
        user_id: Owner of the token
        email: Email to embed
        role: Role name to embed
        expires_delta: Lifetime override (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expires_at = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    claims: dict[str, Any] = {
        "sub": normalize_uuid(user_id),
        "email": email,
        "role": role,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }

    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature, audience and expiry of an access token.

    Returns:
        The decoded claims

    Raises:
        jose.ExpiredSignatureError: If the token has expired
        jose.JWTError: If the token is malformed or the signature is wrong
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
    )

# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional

from core.models.user import UserResponse, UserRole


class AuthUser(BaseModel):
    """
    Authenticated user extracted from the access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None
    role: UserRole = UserRole.USER

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class TokenPayload(BaseModel):
    """
    Decoded access token payload.

    Written by lib.security.create_access_token.
    """
    sub: str  # User ID
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    aud: str
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class TokenResponse(BaseModel):
    """
    Response of a successful login.

    Clients send access_token back as `Authorization: Bearer <token>`.
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse

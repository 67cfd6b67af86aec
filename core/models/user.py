# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user accounts:
# - UserCreate: Registration payload
# - UserUpdate: Partial profile update
# - UserResponse: What clients see (never the password hash)
# - UserRole: USER or ADMIN, embedded in the access token
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRole(str, Enum):
    """
    Access level of an account.

    - USER: Manages only their own records
    - ADMIN: Can also list, re-role and delete other accounts
    """
    USER = "USER"
    ADMIN = "ADMIN"


class UserCreate(BaseModel):
    """
    Schema for registering a new account.

    Example:
        {
            "username": "jorge",
            "email": "jorge@gmail.com",
            "password": "123456"
        }
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Display name, unique across accounts"
    )

    email: str = Field(
        ...,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Login email, unique across accounts"
    )

    password: str = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt ignores anything past 72 bytes
        description="Plain password, hashed with bcrypt before storage"
    )


class UserUpdate(BaseModel):
    """
    Schema for updating the current account.

    Every field is optional; omitted fields keep their value.
    """

    username: str | None = Field(default=None, min_length=3, max_length=50)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    password: str | None = Field(default=None, min_length=6, max_length=72)


class RoleUpdate(BaseModel):
    """Schema for an admin changing another account's role."""
    role: UserRole


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients.

    Built from a `users` row; password_hash is dropped because the model
    doesn't declare it.
    """

    id: UUID
    username: str
    email: str
    role: UserRole = UserRole.USER
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

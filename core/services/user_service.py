# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles account registration, login checks, profile updates and the
# admin-only operations (listing, role changes, deletion).
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.security import hash_password, verify_password
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_blank, normalize_uuid
from core.models.user import UserCreate, UserResponse, UserRole, UserUpdate
from app.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidUserIdError,
    UserNotFoundError,
    UserOperationError,
    UsernameAlreadyTakenError,
)

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserService:
    """
    Service for user account operations.

    Emails are stored lower-cased so lookups and uniqueness checks are
    case-insensitive.
    """

    @staticmethod
    def _fetch_row(user_id: str | UUID | None) -> dict[str, Any]:
        if is_blank(user_id):
            raise InvalidUserIdError()

        user_id_str = normalize_uuid(user_id)
        try:
            row = SupabaseClient.fetch_by_id(USERS_TABLE, user_id_str)
        except SupabaseClientError as e:
            raise UserOperationError("Failed to load user", error=str(e)) from e

        if not row:
            raise UserNotFoundError(user_id_str)
        return row

    @staticmethod
    def _check_unique(
        email: str | None,
        username: str | None,
        exclude_id: str | None = None,
    ) -> None:
        try:
            email_taken = bool(email) and SupabaseClient.exists(
                USERS_TABLE, {"email": email}, exclude_id=exclude_id
            )
            username_taken = bool(username) and SupabaseClient.exists(
                USERS_TABLE, {"username": username}, exclude_id=exclude_id
            )
        except SupabaseClientError as e:
            raise UserOperationError("Failed to check for an existing account.", error=str(e)) from e

        if email_taken:
            raise EmailAlreadyRegisteredError(email)
        if username_taken:
            raise UsernameAlreadyTakenError(username)

    @staticmethod
    def _conflict_error(error: SupabaseClientError, email: str | None, username: str | None):
        """Map a unique-constraint failure to the field it was raised for."""
        if username and "username" in error.message:
            return UsernameAlreadyTakenError(username)
        return EmailAlreadyRegisteredError(email or "")

    @staticmethod
    def register(data: UserCreate, role: UserRole = UserRole.USER) -> UserResponse:
        """
        Register a new account.

        Args:
            data: Username, email and plain password
            role: Role for the new account (admins are seeded, not self-registered)

        Returns:
            The created user

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
            UsernameAlreadyTakenError: If the username is taken
            UserOperationError: If the insert fails
        """
        email = data.email.strip().lower()
        username = data.username.strip()

        UserService._check_unique(email, username)

        try:
            row = SupabaseClient.insert_row(USERS_TABLE, {
                "username": username,
                "email": email,
                "password_hash": hash_password(data.password),
                "role": role.value,
            })
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise UserService._conflict_error(e, email, username) from e
            logger.error(f"Failed to register user {email}: {e}")
            raise UserOperationError("Failed to create account. Please try again.", error=str(e)) from e

        logger.info(f"Registered user: {row['id']}")
        return UserResponse.model_validate(row)

    @staticmethod
    def authenticate(email: str, password: str) -> UserResponse:
        """
        Check an email/password pair.

        Returns:
            The matching user

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        if is_blank(email) or not password:
            raise InvalidCredentialsError()

        try:
            row = SupabaseClient.fetch_one(USERS_TABLE, {"email": email.strip().lower()})
        except SupabaseClientError as e:
            raise UserOperationError("Failed to load account.", error=str(e)) from e

        if not row or not verify_password(password, row.get("password_hash")):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        return UserResponse.model_validate(row)

    @staticmethod
    def get_user(user_id: str | UUID | None) -> UserResponse:
        """
        Get a user by ID.

        Raises:
            InvalidUserIdError: If user_id is blank
            UserNotFoundError: If the user doesn't exist
        """
        return UserResponse.model_validate(UserService._fetch_row(user_id))

    @staticmethod
    def user_exists(user_id: str | UUID | None) -> bool:
        if is_blank(user_id):
            return False
        try:
            return SupabaseClient.fetch_by_id(USERS_TABLE, normalize_uuid(user_id)) is not None
        except SupabaseClientError as e:
            raise UserOperationError("Failed to load user", error=str(e)) from e

    @staticmethod
    def list_users() -> list[UserResponse]:
        """List every account, oldest first."""
        try:
            rows = SupabaseClient.fetch_all(USERS_TABLE)
        except SupabaseClientError as e:
            logger.error(f"Failed to list users: {e}")
            raise UserOperationError("Failed to list accounts. Please try again.", error=str(e)) from e

        return [UserResponse.model_validate(row) for row in rows]

    @staticmethod
    def update_user(user_id: str | UUID, data: UserUpdate) -> UserResponse:
        """
        Update username, email and/or password.

        Omitted fields keep their value; uniqueness is re-checked against
        the other accounts.

        Raises:
            UserNotFoundError: If the user doesn't exist
            EmailAlreadyRegisteredError / UsernameAlreadyTakenError: On conflicts
        """
        row = UserService._fetch_row(user_id)

        update_data: dict[str, Any] = {}
        if data.username is not None:
            update_data["username"] = data.username.strip()
        if data.email is not None:
            update_data["email"] = data.email.strip().lower()
        if data.password is not None:
            update_data["password_hash"] = hash_password(data.password)

        if not update_data:
            return UserResponse.model_validate(row)  # Nothing to update

        UserService._check_unique(
            update_data.get("email"),
            update_data.get("username"),
            exclude_id=row["id"],
        )

        try:
            updated = SupabaseClient.update_row(USERS_TABLE, row["id"], update_data)
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise UserService._conflict_error(
                    e, update_data.get("email"), update_data.get("username")
                ) from e
            logger.error(f"Failed to update user {row['id']}: {e}")
            raise UserOperationError("Failed to update account. Please try again.", error=str(e)) from e

        logger.info(f"Updated user: {row['id']}")
        return UserResponse.model_validate(updated or {**row, **update_data})

    @staticmethod
    def change_role(user_id: str | UUID, role: UserRole) -> UserResponse:
        """Set a user's role (admin operation)."""
        row = UserService._fetch_row(user_id)

        try:
            updated = SupabaseClient.update_row(USERS_TABLE, row["id"], {"role": role.value})
        except SupabaseClientError as e:
            raise UserOperationError("Failed to change role. Please try again.", error=str(e)) from e

        logger.info(f"Changed role of user {row['id']} to {role.value}")
        return UserResponse.model_validate(updated or {**row, "role": role.value})

    @staticmethod
    def delete_user(user_id: str | UUID) -> None:
        """
        Delete an account.

        The database cascades the delete to the user's categories,
        expenses, incomes and budgets.
        """
        row = UserService._fetch_row(user_id)

        try:
            SupabaseClient.delete_row(USERS_TABLE, row["id"])
        except SupabaseClientError as e:
            logger.error(f"Failed to delete user {row['id']}: {e}")
            raise UserOperationError("Failed to delete account. Please try again.", error=str(e)) from e

        logger.info(f"Deleted user: {row['id']}")

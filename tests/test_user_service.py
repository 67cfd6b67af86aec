# =============================================================================
# tests/test_user_service.py - User Service Tests
# =============================================================================
# Run with: pytest tests/test_user_service.py -v
# =============================================================================

from unittest.mock import patch
from uuid import uuid4

import pytest

from app.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidUserIdError,
    UserNotFoundError,
    UserOperationError,
    UsernameAlreadyTakenError,
)
from core.models.user import UserCreate, UserRole, UserUpdate
from core.services.user_service import USERS_TABLE, UserService
from lib.security import verify_password
from lib.supabase_client import SupabaseClient, SupabaseClientError


class TestRegister:
    """Tests for UserService.register."""

    def test_register_stores_hash_not_password(self, fake_db):
        user = UserService.register(UserCreate(
            username="jorge", email="Jorge@Gmail.com", password="123456"
        ))

        row = fake_db.tables[USERS_TABLE][0]
        assert user.email == "jorge@gmail.com"
        assert user.role == UserRole.USER
        assert row["password_hash"] != "123456"
        assert verify_password("123456", row["password_hash"])

    def test_duplicate_email_rejected(self, user):
        with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
            UserService.register(UserCreate(
                username="outro", email="JORGE@gmail.com", password="123456"
            ))

        assert exc_info.value.status_code == 409

    def test_duplicate_username_rejected(self, user):
        with pytest.raises(UsernameAlreadyTakenError):
            UserService.register(UserCreate(
                username="jorge", email="novo@gmail.com", password="123456"
            ))

    def test_insert_failure_wrapped(self):
        error = SupabaseClientError("connection refused", code="INSERT_FAILED")

        with patch.object(SupabaseClient, "insert_row", side_effect=error):
            with pytest.raises(UserOperationError) as exc_info:
                UserService.register(UserCreate(
                    username="jorge", email="jorge@gmail.com", password="123456"
                ))

        assert exc_info.value.status_code == 500
        assert exc_info.value.__cause__ is error


class TestAuthenticate:
    """Tests for UserService.authenticate."""

    def test_valid_credentials(self, user):
        authenticated = UserService.authenticate("jorge@gmail.com", "123456")
        assert authenticated.id == user.id

    def test_email_is_case_insensitive(self, user):
        assert UserService.authenticate("  JORGE@gmail.com ", "123456").id == user.id

    def test_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            UserService.authenticate("jorge@gmail.com", "wrong-password")

        assert exc_info.value.status_code == 401

    def test_unknown_email(self, user):
        with pytest.raises(InvalidCredentialsError):
            UserService.authenticate("ninguem@gmail.com", "123456")

    def test_blank_email(self):
        with pytest.raises(InvalidCredentialsError):
            UserService.authenticate("", "123456")


class TestGetUser:

    def test_get_existing(self, user):
        assert UserService.get_user(user.id).username == "jorge"

    def test_get_unknown(self):
        with pytest.raises(UserNotFoundError):
            UserService.get_user(uuid4())

    @pytest.mark.parametrize("user_id", [None, "", "   "])
    def test_blank_id(self, user_id):
        with pytest.raises(InvalidUserIdError):
            UserService.get_user(user_id)

    def test_user_exists(self, user):
        assert UserService.user_exists(user.id) is True
        assert UserService.user_exists(uuid4()) is False
        assert UserService.user_exists(None) is False


class TestUpdateUser:
    """Tests for UserService.update_user."""

    def test_update_username_and_password(self, user, fake_db):
        updated = UserService.update_user(user.id, UserUpdate(username="jorge2", password="nova-senha"))

        assert updated.username == "jorge2"
        assert UserService.authenticate("jorge@gmail.com", "nova-senha").id == user.id

    def test_update_email_lowercased(self, user):
        updated = UserService.update_user(user.id, UserUpdate(email="NOVO@gmail.com"))
        assert updated.email == "novo@gmail.com"

    def test_keeping_own_email_is_not_a_conflict(self, user):
        updated = UserService.update_user(user.id, UserUpdate(email="jorge@gmail.com"))
        assert updated.email == "jorge@gmail.com"

    def test_taking_another_users_email_rejected(self, user, other_user):
        with pytest.raises(EmailAlreadyRegisteredError):
            UserService.update_user(user.id, UserUpdate(email="maria@gmail.com"))

    def test_empty_update_returns_unchanged(self, user):
        assert UserService.update_user(user.id, UserUpdate()).username == "jorge"


class TestAdminOperations:

    def test_list_users(self, user, other_user):
        users = UserService.list_users()
        assert [u.username for u in users] == ["jorge", "maria"]

    def test_change_role(self, user):
        assert UserService.change_role(user.id, UserRole.ADMIN).role == UserRole.ADMIN

    def test_delete_user(self, user):
        UserService.delete_user(user.id)

        with pytest.raises(UserNotFoundError):
            UserService.get_user(user.id)

    def test_delete_failure_wrapped(self, user):
        error = SupabaseClientError("connection refused", code="DELETE_FAILED")

        with patch.object(SupabaseClient, "delete_row", side_effect=error):
            with pytest.raises(UserOperationError):
                UserService.delete_user(user.id)


class TestDatabaseFailures:
    """Database errors surface as UserOperationError, races as 409."""

    def _unique_violation(self, constraint: str) -> str:
        return (
            "{'code': '23505', 'message': 'duplicate key value violates unique constraint "
            f"\"{constraint}\"'}}"
        )

    def test_existence_check_failure_wrapped(self, fake_db):
        fake_db.fail_on = USERS_TABLE

        with pytest.raises(UserOperationError) as exc_info:
            UserService.register(UserCreate(
                username="jorge", email="jorge@gmail.com", password="123456"
            ))

        assert isinstance(exc_info.value.__cause__, SupabaseClientError)

    def test_login_lookup_failure_wrapped(self, user, fake_db):
        fake_db.fail_on = USERS_TABLE

        with pytest.raises(UserOperationError):
            UserService.authenticate("jorge@gmail.com", "123456")

    def test_list_failure_wrapped(self, user, fake_db):
        fake_db.fail_on = USERS_TABLE

        with pytest.raises(UserOperationError):
            UserService.list_users()

    def test_concurrent_username_reported_as_conflict(self, fake_db):
        fake_db.fail_on = USERS_TABLE
        fake_db.fail_message = self._unique_violation("users_username_key")

        with patch.object(SupabaseClient, "exists", return_value=False):
            with pytest.raises(UsernameAlreadyTakenError) as exc_info:
                UserService.register(UserCreate(
                    username="jorge", email="jorge@gmail.com", password="123456"
                ))

        assert exc_info.value.status_code == 409

    def test_concurrent_email_reported_as_conflict(self, fake_db):
        fake_db.fail_on = USERS_TABLE
        fake_db.fail_message = self._unique_violation("users_email_key")

        with patch.object(SupabaseClient, "exists", return_value=False):
            with pytest.raises(EmailAlreadyRegisteredError):
                UserService.register(UserCreate(
                    username="jorge", email="jorge@gmail.com", password="123456"
                ))

    def test_update_into_taken_email_reported_as_conflict(self, user, fake_db):
        row = fake_db.tables[USERS_TABLE][0]
        fake_db.fail_on = USERS_TABLE
        fake_db.fail_message = self._unique_violation("users_email_key")

        with patch.object(UserService, "_fetch_row", return_value=row), \
                patch.object(SupabaseClient, "exists", return_value=False):
            with pytest.raises(EmailAlreadyRegisteredError):
                UserService.update_user(user.id, UserUpdate(email="maria@gmail.com"))

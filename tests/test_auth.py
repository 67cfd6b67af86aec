# =============================================================================
# tests/test_auth.py - Auth Dependency Tests
# =============================================================================
# Tests get_current_user / require_admin directly, without HTTP.
#
# Run with: pytest tests/test_auth.py -v
# =============================================================================

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.auth.dependencies import get_current_user, get_current_user_optional, require_admin
from app.auth.models import AuthUser
from app.config import settings
from core.models.user import UserRole
from lib.security import create_access_token


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _run(coro):
    return asyncio.run(coro)


class TestGetCurrentUser:
    """Tests for the bearer token dependency."""

    def test_valid_token(self):
        user_id = uuid4()
        token = create_access_token(user_id, "jorge@gmail.com", "USER")

        user = _run(get_current_user(_credentials(token)))

        assert user.id == user_id
        assert user.email == "jorge@gmail.com"
        assert user.role == UserRole.USER
        assert user.is_admin is False

    def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            _run(get_current_user(None))

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token(self):
        token = create_access_token(uuid4(), None, "USER", expires_delta=timedelta(minutes=-1))

        with pytest.raises(HTTPException) as exc_info:
            _run(get_current_user(_credentials(token)))

        assert exc_info.value.status_code == 401
        assert "expired" in exc_info.value.detail

    def test_tampered_token(self):
        token = create_access_token(uuid4(), None, "USER")

        with pytest.raises(HTTPException) as exc_info:
            _run(get_current_user(_credentials(token[:-4] + "abcd")))

        assert exc_info.value.status_code == 401

    def test_non_uuid_subject(self):
        token = create_access_token("not-a-uuid", None, "USER")

        with pytest.raises(HTTPException) as exc_info:
            _run(get_current_user(_credentials(token)))

        assert "malformed user ID" in exc_info.value.detail

    def test_unknown_role_rejected(self):
        token = create_access_token(uuid4(), None, "SUPERUSER")

        with pytest.raises(HTTPException) as exc_info:
            _run(get_current_user(_credentials(token)))

        assert exc_info.value.status_code == 401

    def test_missing_audience_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": 9999999999, "iat": 0},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(HTTPException):
            _run(get_current_user(_credentials(token)))


class TestOptionalUser:

    def test_no_token_gives_none(self):
        assert _run(get_current_user_optional(None)) is None

    def test_bad_token_gives_none(self):
        assert _run(get_current_user_optional(_credentials("garbage"))) is None

    def test_valid_token(self):
        user_id = uuid4()
        token = create_access_token(user_id, None, "ADMIN")

        user = _run(get_current_user_optional(_credentials(token)))
        assert user.id == user_id


class TestRequireAdmin:

    def test_admin_allowed(self):
        admin = AuthUser(id=uuid4(), role=UserRole.ADMIN)
        assert _run(require_admin(admin)) is admin

    def test_user_forbidden(self):
        with pytest.raises(HTTPException) as exc_info:
            _run(require_admin(AuthUser(id=uuid4(), role=UserRole.USER)))

        assert exc_info.value.status_code == 403

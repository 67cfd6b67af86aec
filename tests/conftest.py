# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Replaces the Supabase client with an in-memory fake of the PostgREST
#   query builder, so services run unmodified against plain dicts
# - Provides users, categories and auth headers for service and API tests
# =============================================================================

import os
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from itertools import count
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-unit-tests")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CHART_LANGUAGE", "pt-BR")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.models.category import CategoryCreate, CategoryType
from core.models.user import UserCreate, UserRole
from core.services.category_service import CategoryService
from core.services.user_service import UserService
from lib.security import create_access_token
from lib.supabase_client import SupabaseClient


# =============================================================================
# In-memory Supabase
# =============================================================================

def _sort_key(value: Any) -> tuple:
    if value is None:
        return (0, "")
    try:
        return (1, Decimal(str(value)))
    except InvalidOperation:
        return (2, str(value))


def _compare(left: Any, right: Any) -> int:
    """Compare like Postgres would for numeric and ISO text columns."""
    a, b = _sort_key(left), _sort_key(right)
    if a[0] != b[0]:
        a, b = (2, str(left)), (2, str(right))
    return (a > b) - (a < b)


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]] | dict[str, Any] | None, count: int | None = None):
        self.data = data
        self.count = count


class FakeQuery:
    """Chainable query mimicking postgrest's SyncRequestBuilder."""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._operation = "select"
        self._payload: Any = None
        self._filters: list = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None
        self._single = False

    # Operations

    def select(self, *columns, count=None):
        self._operation = "select"
        return self

    def insert(self, data):
        self._operation = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._operation = "update"
        self._payload = data
        return self

    def delete(self):
        self._operation = "delete"
        return self

    # Filters

    def eq(self, column, value):
        self._filters.append(lambda row: _compare(row.get(column), value) == 0)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: _compare(row.get(column), value) != 0)
        return self

    def gte(self, column, value):
        self._filters.append(lambda row: _compare(row.get(column), value) >= 0)
        return self

    def lte(self, column, value):
        self._filters.append(lambda row: _compare(row.get(column), value) <= 0)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, size):
        self._limit = size
        return self

    def single(self):
        self._single = True
        return self

    # Execution

    def _matching(self) -> list[dict[str, Any]]:
        rows = self._db.tables.setdefault(self._table, [])
        return [row for row in rows if all(check(row) for check in self._filters)]

    def execute(self) -> FakeResponse:
        if self._db.fail_on is not None and self._table == self._db.fail_on:
            raise RuntimeError(self._db.fail_message)

        if self._operation == "insert":
            records = self._payload if isinstance(self._payload, list) else [self._payload]
            created = [self._db.new_row(self._table, record) for record in records]
            return FakeResponse([dict(row) for row in created])

        rows = self._matching()

        if self._operation == "update":
            for row in rows:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in rows])

        if self._operation == "delete":
            table = self._db.tables[self._table]
            self._db.tables[self._table] = [row for row in table if row not in rows]
            return FakeResponse([dict(row) for row in rows])

        if self._order:
            column, desc = self._order
            rows = sorted(rows, key=lambda row: _sort_key(row.get(column)), reverse=desc)
        if self._limit is not None:
            rows = rows[: self._limit]

        if self._single:
            if len(rows) != 1:
                raise Exception(
                    "{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}"
                )
            return FakeResponse(dict(rows[0]))

        return FakeResponse([dict(row) for row in rows], count=len(rows))


class FakeSupabase:
    """Stands in for supabase.Client; only table() is used by the services."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.fail_on: str | None = None
        self.fail_message = "connection refused"
        self._clock = count()
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def new_row(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "created_at": (self._epoch + timedelta(seconds=next(self._clock))).isoformat(),
            **record,
        }
        self.tables.setdefault(table, []).append(row)
        return row


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fake_db():
    """Fresh in-memory database for every test."""
    db = FakeSupabase()
    SupabaseClient._instance = db
    yield db
    SupabaseClient._instance = None


@pytest.fixture
def user():
    """A registered USER account."""
    return UserService.register(UserCreate(
        username="jorge",
        email="jorge@gmail.com",
        password="123456",
    ))


@pytest.fixture
def other_user():
    """A second account, used for ownership checks."""
    return UserService.register(UserCreate(
        username="maria",
        email="maria@gmail.com",
        password="654321",
    ))


@pytest.fixture
def admin_user():
    return UserService.register(
        UserCreate(username="admin", email="admin@gmail.com", password="admin123"),
        role=UserRole.ADMIN,
    )


@pytest.fixture
def expense_category(user):
    """An expense category named "Alimentacao" owned by `user`."""
    return CategoryService.create_category(
        user.id, CategoryCreate(name="Alimentacao", type=CategoryType.DESPESAS)
    )


def _headers_for(account) -> dict[str, str]:
    token = create_access_token(account.id, account.email, account.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    """Bearer header for `user`."""
    return _headers_for(user)


@pytest.fixture
def other_headers(other_user):
    return _headers_for(other_user)


@pytest.fixture
def admin_headers(admin_user):
    return _headers_for(admin_user)


@pytest.fixture
def client():
    """FastAPI TestClient for the whole application."""
    from fastapi.testclient import TestClient
    from app.main import app

    return TestClient(app)

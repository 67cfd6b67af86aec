# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the repository primitives every service builds on:
# - find by id
# - find all by filters (typically user_id)
# - existence checks (duplicate detection)
# - insert / update / delete
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   expense = SupabaseClient.fetch_by_id("expenses", expense_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST: no rows for .single(); Postgres: invalid text representation
# (e.g. a malformed uuid in a filter). Both mean "no such record".
NOT_FOUND_CODES = ("PGRST116", "22P02")

# Postgres unique_violation. Raised as code UNIQUE_VIOLATION so services can
# report a 409 when two requests race past their existence checks.
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: tells HOW to fix, not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _is_not_found(error: Exception) -> bool:
    text = str(error)
    return any(code in text for code in NOT_FOUND_CODES)


def _unique_violation(table: str, error: Exception) -> SupabaseClientError:
    return SupabaseClientError(
        message=f"Duplicate {table} row: {error}",
        code="UNIQUE_VIOLATION",
        suggestion="A row with the same unique values already exists",
        details={"table": table},
    )


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        rows = SupabaseClient.fetch_all("expenses", {"user_id": user_id})
        created = SupabaseClient.insert_row("categories", {"name": "Food", ...})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership checks happen in the service layer.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @classmethod
    def _normalize_filters(cls, filters: dict[str, Any] | None) -> dict[str, Any]:
        return {
            column: cls._normalize_uuid(value) if isinstance(value, UUID) else value
            for column, value in (filters or {}).items()
        }

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(cls, table: str, record_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Args:
            table: Table name
            record_id: Row UUID

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", record_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if _is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_BY_ID_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "id": record_id_str}
            ) from e

    @classmethod
    def fetch_all(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = "created_at",
        desc: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Fetch every row matching equality filters.

        Args:
            table: Table name
            filters: Column -> value pairs combined with AND
            order_by: Column to sort by (None for database order)
            desc: Sort descending

        Returns:
            List of row dicts (possibly empty)

        Raises:
            SupabaseClientError: If query fails

        Example:
            SupabaseClient.fetch_all("categories", {"user_id": uid, "type": "DESPESAS"})
        """
        client = cls.get_client()
        normalized = cls._normalize_filters(filters)

        try:
            query = client.table(table).select("*")
            for column, value in normalized.items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=desc)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            if _is_not_found(e):
                return []
            raise SupabaseClientError(
                message=f"Failed to fetch {table} rows: {e}",
                code="FETCH_ALL_FAILED",
                details={"table": table, "filters": normalized}
            ) from e

    @classmethod
    def fetch_one(cls, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """
        Fetch the first row matching equality filters.

        Returns:
            Row dict, or None if nothing matches
        """
        client = cls.get_client()
        normalized = cls._normalize_filters(filters)

        try:
            query = client.table(table).select("*")
            for column, value in normalized.items():
                query = query.eq(column, value)

            response = query.limit(1).execute()
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if _is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ONE_FAILED",
                details={"table": table, "filters": normalized}
            ) from e

    @classmethod
    def fetch_between(
        cls,
        table: str,
        filters: dict[str, Any],
        column: str,
        lower: Any,
        upper: Any,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows whose column lies in [lower, upper] (both inclusive).

        Args:
            table: Table name
            filters: Equality filters applied first (typically user_id)
            column: Column compared against the bounds
            lower: Inclusive lower bound
            upper: Inclusive upper bound
            order_by: Sort column (defaults to the range column)

        Returns:
            List of row dicts, ascending

        Example:
            SupabaseClient.fetch_between(
                "expenses", {"user_id": uid}, "date", "2024-01-01", "2024-01-31"
            )
        """
        client = cls.get_client()
        normalized = cls._normalize_filters(filters)

        try:
            query = client.table(table).select("*")
            for name, value in normalized.items():
                query = query.eq(name, value)
            query = query.gte(column, lower).lte(column, upper)
            query = query.order(order_by or column)

            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table} rows by {column} range: {e}",
                code="FETCH_RANGE_FAILED",
                details={"table": table, "column": column, "lower": str(lower), "upper": str(upper)}
            ) from e

    @classmethod
    def exists(
        cls,
        table: str,
        filters: dict[str, Any],
        exclude_id: str | UUID | None = None,
    ) -> bool:
        """
        Check whether any row matches equality filters.

        Args:
            table: Table name
            filters: Column -> value pairs combined with AND
            exclude_id: Ignore this row (used when re-checking on update)

        Returns:
            True if at least one other row matches
        """
        client = cls.get_client()
        normalized = cls._normalize_filters(filters)

        try:
            query = client.table(table).select("id")
            for column, value in normalized.items():
                query = query.eq(column, value)
            if exclude_id is not None:
                query = query.neq("id", cls._normalize_uuid(exclude_id))

            response = query.limit(1).execute()
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to check {table} for existing rows: {e}",
                code="EXISTS_CHECK_FAILED",
                details={"table": table, "filters": normalized}
            ) from e

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated id and created_at.

        Raises:
            SupabaseClientError: If insert fails (code UNIQUE_VIOLATION when a
                unique constraint rejects the row)
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(cls._normalize_filters(data))
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            if UNIQUE_VIOLATION_CODE in str(e):
                raise _unique_violation(table, e) from e
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            ) from e

    @classmethod
    def update_row(
        cls,
        table: str,
        record_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a row by primary key.

        Returns:
            Updated row dict, or None if the row doesn't exist

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .update(cls._normalize_filters(data))
                .eq("id", record_id_str)
                .execute()
            )

            return response.data[0] if response.data else None

        except Exception as e:
            if UNIQUE_VIOLATION_CODE in str(e):
                raise _unique_violation(table, e) from e
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": record_id_str}
            ) from e

    @classmethod
    def delete_row(cls, table: str, record_id: str | UUID) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was deleted

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", record_id_str)
                .execute()
            )

            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": record_id_str}
            ) from e

    @classmethod
    def ping(cls) -> None:
        """
        Run a trivial query to prove the database is reachable.

        Raises:
            Exception: Whatever the client raises when the database is down
        """
        cls.get_client().table("users").select("id").limit(1).execute()

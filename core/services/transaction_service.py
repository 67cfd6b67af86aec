# =============================================================================
# core/services/transaction_service.py - Shared Expense/Income Logic
# =============================================================================
# Expenses and incomes share one lifecycle:
#   validate -> look up -> persist -> map to response model
# plus date/value range queries and chart aggregation.
#
# TransactionService holds that lifecycle; ExpenseService and IncomeService
# only say which table, schema, party column and errors to use.
# =============================================================================

import logging
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel

from app.config import settings
from app.exceptions import (
    FinanceAPIException,
    InvalidDataError,
    InvalidUserIdError,
    InvalidUuidError,
    UserNotFoundError,
)
from core.models.chart import BarChartResponse, PieChartResponse, YearMonth
from core.services.chart_service import group_by_category, group_by_month
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_blank, money_to_db, normalize_uuid

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class TransactionService:
    """
    Base service for money movements owned by a user.

    Subclasses set the class attributes below and inherit every operation.
    """

    table: ClassVar[str]
    label: ClassVar[str]  # "expense" / "income", used in messages
    party_field: ClassVar[str]  # payment_destination / payment_origin
    response_model: ClassVar[type[BaseModel]]
    not_found_error: ClassVar[type[FinanceAPIException]]
    operation_error: ClassVar[type[FinanceAPIException]]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _to_response(cls, row: dict[str, Any]) -> Any:
        return cls.response_model.model_validate(row)

    @classmethod
    def _validate_payload(cls, data: Any) -> None:
        if data is None:
            raise InvalidDataError(f"The {cls.label} data cannot be null.")
        if data.amount is None or data.amount <= ZERO:
            raise InvalidDataError(
                f"The {cls.label} amount must be greater than zero.",
                details={"amount": str(data.amount) if data.amount is not None else None},
            )
        if is_blank(data.category):
            raise InvalidDataError(f"The {cls.label} category cannot be empty.")

    @classmethod
    def _to_row(cls, data: Any) -> dict[str, Any]:
        return {
            "date": data.date.isoformat(),
            "category": data.category.strip(),
            "amount": money_to_db(data.amount),
            cls.party_field: getattr(data, cls.party_field),
            "notes": data.notes,
        }

    @classmethod
    def _fetch_row(
        cls,
        record_id: str | UUID | None,
        user_id: str | UUID | None = None,
    ) -> dict[str, Any]:
        if is_blank(record_id):
            raise InvalidUuidError()

        record_id_str = normalize_uuid(record_id)
        try:
            row = SupabaseClient.fetch_by_id(cls.table, record_id_str)
        except SupabaseClientError as e:
            raise cls.operation_error(f"Failed to load {cls.label}.", error=str(e)) from e

        if not row:
            raise cls.not_found_error(record_id_str)

        # Don't reveal that another user's record exists
        if user_id is not None and str(row.get("user_id")) != str(user_id):
            raise cls.not_found_error(record_id_str)

        return row

    @staticmethod
    def _require_user_id(user_id: str | UUID | None) -> str:
        if is_blank(user_id):
            raise InvalidUserIdError()
        return normalize_uuid(user_id)

    @staticmethod
    def _validate_date_range(start: date | None, end: date | None) -> None:
        if start is None or end is None:
            raise InvalidDataError("The start and end dates cannot be null.")
        if start > end:
            raise InvalidDataError(
                "The start date cannot be after the end date.",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )

    @classmethod
    def rows_between(cls, user_id: str, start: date, end: date) -> list[dict[str, Any]]:
        """Raw rows of a user dated within [start, end], oldest first."""
        try:
            return SupabaseClient.fetch_between(
                cls.table, {"user_id": user_id}, "date", start.isoformat(), end.isoformat()
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch {cls.label}s by date range: {e}")
            raise cls.operation_error(
                f"Failed to search {cls.label}s by date range. Please try again.",
                error=str(e),
            ) from e

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, data: Any, user_id: str | UUID | None) -> Any:
        """
        Register a record for a user.

        Args:
            data: Create schema (date, category, amount, party, notes)
            user_id: Owner

        Returns:
            The created record

        Raises:
            InvalidDataError: If data is None, amount is missing or not positive,
                or the category is blank
            InvalidUserIdError: If user_id is blank
            UserNotFoundError: If the owner doesn't exist
            operation_error: If the insert fails
        """
        cls._validate_payload(data)
        user_id_str = cls._require_user_id(user_id)

        try:
            owner = SupabaseClient.fetch_by_id("users", user_id_str)
        except SupabaseClientError as e:
            raise cls.operation_error(f"Failed to load the {cls.label} owner.", error=str(e)) from e

        if not owner:
            raise UserNotFoundError(user_id_str)

        try:
            row = SupabaseClient.insert_row(cls.table, {**cls._to_row(data), "user_id": user_id_str})
        except SupabaseClientError as e:
            logger.error(f"Failed to create {cls.label}: {e}")
            raise cls.operation_error(
                f"Failed to create {cls.label}. Please try again.", error=str(e)
            ) from e

        logger.info(f"Created {cls.label}: {row['id']} for user: {user_id_str}")
        return cls._to_response(row)

    @classmethod
    def list_by_user(cls, user_id: str | UUID | None) -> list[Any]:
        """
        List every record of a user, oldest date first.

        Raises:
            InvalidUserIdError: If user_id is blank
            not_found_error: If the user has no records
            operation_error: If the query fails
        """
        user_id_str = cls._require_user_id(user_id)

        try:
            rows = SupabaseClient.fetch_all(cls.table, {"user_id": user_id_str}, order_by="date")
        except SupabaseClientError as e:
            logger.error(f"Failed to list {cls.label}s for user {user_id_str}: {e}")
            raise cls.operation_error(
                f"Failed to list {cls.label}s. Please try again.", error=str(e)
            ) from e

        if not rows:
            raise cls.not_found_error(user_id_str)

        return [cls._to_response(row) for row in rows]

    @classmethod
    def get(cls, record_id: str | UUID | None, user_id: str | UUID | None = None) -> Any:
        """
        Get a record by ID.

        Args:
            record_id: Record UUID
            user_id: If provided, the record must belong to this user

        Raises:
            InvalidUuidError: If record_id is blank
            not_found_error: If it doesn't exist (or isn't the user's)
        """
        return cls._to_response(cls._fetch_row(record_id, user_id))

    @classmethod
    def update(
        cls,
        record_id: str | UUID | None,
        data: Any,
        user_id: str | UUID | None = None,
    ) -> Any:
        """
        Replace date, category, amount, party and notes of a record.

        Raises:
            InvalidUuidError: If record_id is blank
            InvalidDataError: If data is None or breaks an amount/category rule
            not_found_error: If the record doesn't exist (or isn't the user's)
            operation_error: If the update fails
        """
        if is_blank(record_id):
            raise InvalidUuidError()
        if data is None:
            raise InvalidDataError(f"The {cls.label} data cannot be null.")

        row = cls._fetch_row(record_id, user_id)
        cls._validate_payload(data)

        update_data = cls._to_row(data)
        try:
            updated = SupabaseClient.update_row(cls.table, row["id"], update_data)
        except SupabaseClientError as e:
            logger.error(f"Failed to update {cls.label} {row['id']}: {e}")
            raise cls.operation_error(
                f"Failed to update {cls.label}. Please try again.", error=str(e)
            ) from e

        logger.info(f"Updated {cls.label}: {row['id']}")
        return cls._to_response(updated or {**row, **update_data})

    @classmethod
    def delete(cls, record_id: str | UUID | None, user_id: str | UUID | None = None) -> None:
        """
        Delete a record.

        Raises:
            InvalidUuidError: If record_id is blank
            not_found_error: If the record doesn't exist (or isn't the user's)
            operation_error: If the delete fails
        """
        row = cls._fetch_row(record_id, user_id)

        try:
            SupabaseClient.delete_row(cls.table, row["id"])
        except SupabaseClientError as e:
            logger.error(f"Failed to delete {cls.label} {row['id']}: {e}")
            raise cls.operation_error(
                f"Failed to delete {cls.label}. Please try again.", error=str(e)
            ) from e

        logger.info(f"Deleted {cls.label}: {row['id']}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @classmethod
    def find_by_date_range(
        cls,
        user_id: str | UUID | None,
        start: date | None,
        end: date | None,
    ) -> list[Any]:
        """
        Records dated within [start, end], both inclusive.

        Raises:
            InvalidUserIdError: If user_id is blank
            InvalidDataError: If a date is missing or start is after end
            operation_error: If the query fails
        """
        user_id_str = cls._require_user_id(user_id)
        cls._validate_date_range(start, end)

        rows = cls.rows_between(user_id_str, start, end)
        return [cls._to_response(row) for row in rows]

    @classmethod
    def find_by_value_range(
        cls,
        user_id: str | UUID | None,
        minimum: Decimal | None,
        maximum: Decimal | None,
    ) -> list[Any]:
        """
        Records whose amount is within [minimum, maximum], both inclusive.

        Raises:
            InvalidUserIdError: If user_id is blank
            InvalidDataError: If a bound is missing, not positive, or min > max
            operation_error: If the query fails
        """
        user_id_str = cls._require_user_id(user_id)

        if minimum is None or maximum is None:
            raise InvalidDataError("The minimum and maximum values cannot be null.")
        if minimum <= ZERO or maximum <= ZERO:
            raise InvalidDataError("The minimum and maximum values must be greater than zero.")
        if minimum > maximum:
            raise InvalidDataError(
                "The minimum value cannot be greater than the maximum value.",
                details={"min": str(minimum), "max": str(maximum)},
            )

        try:
            rows = SupabaseClient.fetch_between(
                cls.table,
                {"user_id": user_id_str},
                "amount",
                money_to_db(minimum),
                money_to_db(maximum),
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch {cls.label}s by value range: {e}")
            raise cls.operation_error(
                f"Failed to search {cls.label}s by value range. Please try again.",
                error=str(e),
            ) from e

        return [cls._to_response(row) for row in rows]

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------

    @classmethod
    def bar_chart(
        cls,
        user_id: str | UUID | None,
        start: YearMonth | str,
        end: YearMonth | str,
    ) -> BarChartResponse:
        """
        Monthly totals between two months, both inclusive.

        Args:
            user_id: Owner
            start: First month (YearMonth or "YYYY-MM")
            end: Last month (YearMonth or "YYYY-MM")

        Returns:
            BarChartResponse with month labels in chronological order

        Raises:
            InvalidDataError: If a month is malformed or start is after end
        """
        user_id_str = cls._require_user_id(user_id)

        try:
            start_month = start if isinstance(start, YearMonth) else YearMonth.parse(start)
            end_month = end if isinstance(end, YearMonth) else YearMonth.parse(end)
        except ValueError as e:
            raise InvalidDataError(str(e)) from e

        if start_month > end_month:
            raise InvalidDataError(
                "The start month cannot be after the end month.",
                details={"start": str(start_month), "end": str(end_month)},
            )

        rows = cls.rows_between(user_id_str, start_month.first_day(), end_month.last_day())
        return BarChartResponse(monthly_totals=group_by_month(rows, settings.CHART_LANGUAGE))

    @classmethod
    def pie_chart(
        cls,
        user_id: str | UUID | None,
        start: date | None,
        end: date | None,
    ) -> PieChartResponse:
        """
        Category totals between two dates, both inclusive.

        Raises:
            InvalidDataError: If a date is missing or start is after end
        """
        user_id_str = cls._require_user_id(user_id)
        cls._validate_date_range(start, end)

        rows = cls.rows_between(user_id_str, start, end)
        return PieChartResponse(category_totals=group_by_category(rows))

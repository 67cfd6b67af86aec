# =============================================================================
# core/services/budget_service.py - Monthly Budget Business Logic
# =============================================================================
# Handles CRUD for monthly budgets and the budget-vs-spending status.
#
# Invariant: at most one budget per (user, category, period). It is checked
# before every insert and update, excluding the budget being updated.
# =============================================================================

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_blank, money_to_db, normalize_uuid
from core.models.budget import MonthlyBudgetResponse, MonthlyBudgetStatus
from core.models.chart import YearMonth
from core.services.category_service import CATEGORIES_TABLE, CategoryService, normalize_name
from core.services.chart_service import total_amount
from core.services.expense_service import ExpenseService
from app.exceptions import (
    InvalidDataError,
    InvalidUserIdError,
    InvalidUuidError,
    MonthlyBudgetAlreadyExistsError,
    MonthlyBudgetNotFoundError,
    MonthlyBudgetOperationError,
)

logger = logging.getLogger(__name__)

BUDGETS_TABLE = "monthly_budgets"
ZERO = Decimal("0")


class MonthlyBudgetService:
    """
    Service for monthly budget operations.

    Budgets reference a category by id; callers pass the category name,
    which is resolved against the user's own categories.
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_user_id(user_id: str | UUID | None) -> str:
        if is_blank(user_id):
            raise InvalidUserIdError()
        return normalize_uuid(user_id)

    @staticmethod
    def _parse_period(period: YearMonth | str | None) -> YearMonth:
        if period is None:
            raise InvalidDataError("The budget period cannot be null.")
        if isinstance(period, YearMonth):
            return period
        try:
            return YearMonth.parse(period)
        except ValueError as e:
            raise InvalidDataError(str(e)) from e

    @staticmethod
    def _validate_limit(limit_amount: Decimal | None) -> None:
        if limit_amount is None or limit_amount <= ZERO:
            raise InvalidDataError(
                "The budget limit must be greater than zero.",
                details={"limit_amount": str(limit_amount) if limit_amount is not None else None},
            )

    @staticmethod
    def _category_names(user_id: str) -> dict[str, str]:
        try:
            rows = SupabaseClient.fetch_all(CATEGORIES_TABLE, {"user_id": user_id}, order_by=None)
        except SupabaseClientError as e:
            raise MonthlyBudgetOperationError("Failed to load budget categories.", error=str(e)) from e
        return {str(row["id"]): row["name"] for row in rows}

    @staticmethod
    def _to_response(row: dict[str, Any], category_name: str) -> MonthlyBudgetResponse:
        return MonthlyBudgetResponse.model_validate({**row, "category_name": category_name})

    @staticmethod
    def _to_responses(user_id: str, rows: list[dict[str, Any]]) -> list[MonthlyBudgetResponse]:
        names = MonthlyBudgetService._category_names(user_id)
        return [
            MonthlyBudgetService._to_response(row, names.get(str(row["category_id"]), ""))
            for row in rows
        ]

    @staticmethod
    def _fetch_owned(user_id: str, budget_id: str | UUID | None) -> dict[str, Any]:
        if is_blank(budget_id):
            raise InvalidUuidError()

        budget_id_str = normalize_uuid(budget_id)
        try:
            row = SupabaseClient.fetch_by_id(BUDGETS_TABLE, budget_id_str)
        except SupabaseClientError as e:
            raise MonthlyBudgetOperationError("Failed to load monthly budget.", error=str(e)) from e

        # Don't reveal that another user's budget exists
        if not row or str(row.get("user_id")) != user_id:
            raise MonthlyBudgetNotFoundError(budget_id_str)
        return row

    @staticmethod
    def _check_duplicate(
        user_id: str,
        category_id: str,
        category_name: str,
        period: YearMonth,
        exclude_id: str | None = None,
    ) -> None:
        try:
            taken = SupabaseClient.exists(
                BUDGETS_TABLE,
                {"user_id": user_id, "category_id": category_id, "period": str(period)},
                exclude_id=exclude_id,
            )
        except SupabaseClientError as e:
            raise MonthlyBudgetOperationError(
                "Failed to check for an existing monthly budget.", error=str(e)
            ) from e

        if taken:
            raise MonthlyBudgetAlreadyExistsError(category_name, str(period))

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    @staticmethod
    def create_budget(
        user_id: str | UUID | None,
        category_name: str | None,
        limit_amount: Decimal | None,
        period: YearMonth | str | None,
    ) -> MonthlyBudgetResponse:
        """
        Create a monthly budget.

        Args:
            user_id: Owner
            category_name: Name of one of the owner's categories
            limit_amount: Spending ceiling (> 0)
            period: Month (YearMonth or "YYYY-MM")

        Returns:
            The created budget

        Raises:
            InvalidDataError: If the limit isn't positive or the period is missing
            CategoryNameNotFoundError: If the owner has no such category
            MonthlyBudgetAlreadyExistsError: If (user, category, period) is taken
            MonthlyBudgetOperationError: If the insert fails
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        MonthlyBudgetService._validate_limit(limit_amount)
        year_month = MonthlyBudgetService._parse_period(period)

        category = CategoryService.get_category_by_name(user_id_str, category_name)
        category_id = str(category.id)

        MonthlyBudgetService._check_duplicate(user_id_str, category_id, category.name, year_month)

        try:
            row = SupabaseClient.insert_row(BUDGETS_TABLE, {
                "user_id": user_id_str,
                "category_id": category_id,
                "limit_amount": money_to_db(limit_amount),
                "period": str(year_month),
            })
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise MonthlyBudgetAlreadyExistsError(category.name, str(year_month)) from e
            logger.error(f"Failed to create budget: {e}")
            raise MonthlyBudgetOperationError(
                "Failed to create monthly budget. Please try again.", error=str(e)
            ) from e

        logger.info(f"Created budget: {row['id']} ({category.name} {year_month}) for user: {user_id_str}")
        return MonthlyBudgetService._to_response(row, category.name)

    @staticmethod
    def list_by_user(user_id: str | UUID | None) -> list[MonthlyBudgetResponse]:
        """
        List every budget of a user, most recent period first.

        Raises:
            MonthlyBudgetNotFoundError: If the user has no budgets
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)

        try:
            rows = SupabaseClient.fetch_all(
                BUDGETS_TABLE, {"user_id": user_id_str}, order_by="period", desc=True
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list budgets for user {user_id_str}: {e}")
            raise MonthlyBudgetOperationError(
                "Failed to list monthly budgets. Please try again.", error=str(e)
            ) from e
        if not rows:
            raise MonthlyBudgetNotFoundError(user_id_str)

        return MonthlyBudgetService._to_responses(user_id_str, rows)

    @staticmethod
    def list_by_period(
        user_id: str | UUID | None,
        period: YearMonth | str | None,
    ) -> list[MonthlyBudgetResponse]:
        """
        List a user's budgets for one month (possibly empty).

        Raises:
            InvalidDataError: If the period is missing or malformed
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        year_month = MonthlyBudgetService._parse_period(period)

        try:
            rows = SupabaseClient.fetch_all(
                BUDGETS_TABLE, {"user_id": user_id_str, "period": str(year_month)}
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list budgets of {year_month} for user {user_id_str}: {e}")
            raise MonthlyBudgetOperationError(
                "Failed to list monthly budgets. Please try again.", error=str(e)
            ) from e
        return MonthlyBudgetService._to_responses(user_id_str, rows)

    @staticmethod
    def get_budget(user_id: str | UUID | None, budget_id: str | UUID | None) -> MonthlyBudgetResponse:
        """
        Get one of the user's budgets.

        Raises:
            MonthlyBudgetNotFoundError: If it doesn't exist or isn't the user's
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        row = MonthlyBudgetService._fetch_owned(user_id_str, budget_id)

        try:
            category = SupabaseClient.fetch_by_id(CATEGORIES_TABLE, row["category_id"])
        except SupabaseClientError as e:
            raise MonthlyBudgetOperationError("Failed to load budget category.", error=str(e)) from e

        return MonthlyBudgetService._to_response(row, category["name"] if category else "")

    @staticmethod
    def update_budget(
        user_id: str | UUID | None,
        budget_id: str | UUID | None,
        category_name: str | None,
        limit_amount: Decimal | None,
        period: YearMonth | str | None,
    ) -> MonthlyBudgetResponse:
        """
        Replace a budget's category, limit and period.

        Raises:
            MonthlyBudgetNotFoundError: If the budget doesn't exist or isn't the user's
            InvalidDataError: If the limit isn't positive or the period is missing
            CategoryNameNotFoundError: If the owner has no such category
            MonthlyBudgetAlreadyExistsError: If another budget has (category, period)
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        row = MonthlyBudgetService._fetch_owned(user_id_str, budget_id)

        MonthlyBudgetService._validate_limit(limit_amount)
        year_month = MonthlyBudgetService._parse_period(period)

        category = CategoryService.get_category_by_name(user_id_str, category_name)
        category_id = str(category.id)

        MonthlyBudgetService._check_duplicate(
            user_id_str, category_id, category.name, year_month, exclude_id=str(row["id"])
        )

        update_data = {
            "category_id": category_id,
            "limit_amount": money_to_db(limit_amount),
            "period": str(year_month),
        }

        try:
            updated = SupabaseClient.update_row(BUDGETS_TABLE, row["id"], update_data)
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise MonthlyBudgetAlreadyExistsError(category.name, str(year_month)) from e
            logger.error(f"Failed to update budget {row['id']}: {e}")
            raise MonthlyBudgetOperationError(
                "Failed to update monthly budget. Please try again.", error=str(e)
            ) from e

        logger.info(f"Updated budget: {row['id']}")
        return MonthlyBudgetService._to_response(updated or {**row, **update_data}, category.name)

    @staticmethod
    def delete_budget(user_id: str | UUID | None, budget_id: str | UUID | None) -> None:
        """
        Delete one of the user's budgets.

        Raises:
            MonthlyBudgetNotFoundError: If it doesn't exist or isn't the user's
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        row = MonthlyBudgetService._fetch_owned(user_id_str, budget_id)

        try:
            SupabaseClient.delete_row(BUDGETS_TABLE, row["id"])
        except SupabaseClientError as e:
            logger.error(f"Failed to delete budget {row['id']}: {e}")
            raise MonthlyBudgetOperationError(
                "Failed to delete monthly budget. Please try again.", error=str(e)
            ) from e

        logger.info(f"Deleted budget: {row['id']}")

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    @staticmethod
    def budget_status(
        user_id: str | UUID | None,
        period: YearMonth | str | None,
    ) -> list[MonthlyBudgetStatus]:
        """
        Compare each budget of a month with what was spent in it.

        An expense counts towards a budget when its category label matches
        the budget's category name (case-insensitive).

        Returns:
            One status per budget of the month (possibly empty)
        """
        user_id_str = MonthlyBudgetService._require_user_id(user_id)
        year_month = MonthlyBudgetService._parse_period(period)

        budgets = MonthlyBudgetService.list_by_period(user_id_str, year_month)
        if not budgets:
            return []

        expenses = ExpenseService.rows_between(
            user_id_str, year_month.first_day(), year_month.last_day()
        )

        statuses = []
        for budget in budgets:
            key = normalize_name(budget.category_name)
            spent = total_amount([e for e in expenses if normalize_name(str(e["category"])) == key])
            statuses.append(MonthlyBudgetStatus(
                budget=budget,
                spent=spent,
                remaining=budget.limit_amount - spent,
                exceeded=spent > budget.limit_amount,
            ))

        return statuses

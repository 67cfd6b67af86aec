# =============================================================================
# core/models/budget.py - Monthly Budget Schemas
# =============================================================================
# A monthly budget (orcamento mensal) is a spending ceiling for one user,
# one category and one month. At most one budget exists per
# (user, category, period).
#
# Periods travel as "YYYY-MM" strings; see core.models.chart.YearMonth.
# =============================================================================

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class MonthlyBudgetCreate(BaseModel):
    """
    Schema for creating a monthly budget.

    Example:
        {
            "category_name": "Alimentacao",
            "limit_amount": "800.00",
            "period": "2024-03"
        }
    """

    category_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name of one of the user's categories"
    )

    limit_amount: Decimal | None = Field(
        default=None,
        max_digits=14,
        decimal_places=2,
        description="Spending ceiling; must be greater than zero"
    )

    period: str | None = Field(
        default=None,
        pattern=PERIOD_PATTERN,
        description="Month the budget applies to (YYYY-MM)"
    )


class MonthlyBudgetUpdate(MonthlyBudgetCreate):
    """Full replacement of a budget's category, limit and period."""


class MonthlyBudgetResponse(BaseModel):
    """Schema for returning a budget to clients."""
    id: UUID
    user_id: UUID
    category_id: UUID
    category_name: str
    limit_amount: Decimal
    period: str
    created_at: datetime | None = None


class MonthlyBudgetStatus(BaseModel):
    """
    A budget next to what was actually spent in its month.

    spent sums the user's expenses whose category label matches the
    budget's category name (case-insensitive).
    """
    budget: MonthlyBudgetResponse
    spent: Decimal = Decimal("0")
    remaining: Decimal = Decimal("0")
    exceeded: bool = False

# =============================================================================
# core/models/expense.py - Expense Schemas
# =============================================================================
# An expense (despesa) is a single outflow owned by a user.
#
# Amount rules (non-null, strictly positive) are enforced by ExpenseService so
# that they surface as INVALID_DATA errors rather than schema errors; the
# schema only bounds precision.
# =============================================================================

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class ExpenseCreate(BaseModel):
    """
    Schema for registering an expense.

    Example:
        {
            "date": "2024-03-10",
            "category": "Alimentacao",
            "amount": "57.90",
            "payment_destination": "Supermercado",
            "notes": "Compras da semana"
        }
    """

    # Day the money left the account
    date: date

    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category label used for pie chart grouping"
    )

    amount: Decimal | None = Field(
        default=None,
        max_digits=14,
        decimal_places=2,
        description="Amount spent; must be greater than zero"
    )

    payment_destination: str | None = Field(
        default=None,
        max_length=255,
        description="Who received the payment"
    )

    notes: str | None = Field(default=None, max_length=1000)


class ExpenseUpdate(ExpenseCreate):
    """
    Schema for replacing an expense.

    Updates are full replacements: every field is written.
    """


class ExpenseResponse(BaseModel):
    """Schema for returning an expense to clients."""
    id: UUID
    user_id: UUID
    date: date
    category: str
    amount: Decimal
    payment_destination: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

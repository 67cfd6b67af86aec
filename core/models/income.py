# =============================================================================
# core/models/income.py - Income Schemas
# =============================================================================
# An income (receita) is a single inflow owned by a user. Same contract as
# an expense, with the payment origin instead of its destination.
# =============================================================================

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class IncomeCreate(BaseModel):
    """
    Schema for registering an income.

    Example:
        {
            "date": "2024-03-05",
            "category": "SALARIO",
            "amount": "4500.00",
            "payment_origin": "Empresa X"
        }
    """

    date: date
    category: str = Field(..., min_length=1, max_length=100)
    amount: Decimal | None = Field(
        default=None,
        max_digits=14,
        decimal_places=2,
        description="Amount received; must be greater than zero"
    )
    payment_origin: str | None = Field(
        default=None,
        max_length=255,
        description="Who paid"
    )
    notes: str | None = Field(default=None, max_length=1000)


class IncomeUpdate(IncomeCreate):
    """Full replacement of an income."""


class IncomeResponse(BaseModel):
    """Schema for returning an income to clients."""
    id: UUID
    user_id: UUID
    date: date
    category: str
    amount: Decimal
    payment_origin: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

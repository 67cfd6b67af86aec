# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================
# A category is a user-defined label for expenses or incomes. Budgets point
# at a category by id; clients refer to it by name.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class CategoryType(str, Enum):
    """
    What a category classifies.

    - DESPESAS: expenses (outflows)
    - RECEITAS: incomes (inflows)
    """
    DESPESAS = "DESPESAS"
    RECEITAS = "RECEITAS"


class CategoryCreate(BaseModel):
    """
    Schema for creating a category.

    Example:
        {"name": "Alimentacao", "type": "DESPESAS"}
    """

    name: str = Field(
        ...,
        max_length=100,
        description="Category name, unique per user (case-insensitive)"
    )

    type: CategoryType = Field(
        ...,
        description="Whether the category classifies expenses or incomes"
    )


class CategoryUpdate(BaseModel):
    """Schema for renaming or re-typing a category."""
    name: str | None = Field(default=None, max_length=100)
    type: CategoryType | None = None


class CategoryResponse(BaseModel):
    """Schema for returning a category to clients."""
    id: UUID
    user_id: UUID
    name: str
    type: CategoryType
    created_at: datetime | None = None

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .category_service import CategoryService
from .expense_service import ExpenseService
from .income_service import IncomeService
from .budget_service import MonthlyBudgetService

__all__ = [
    "UserService",
    "CategoryService",
    "ExpenseService",
    "IncomeService",
    "MonthlyBudgetService",
]

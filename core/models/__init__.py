# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Account schemas and roles
# - category.py: User-defined expense/income categories
# - expense.py: Expense (despesa) CRUD schemas
# - income.py: Income (receita) CRUD schemas
# - budget.py: Monthly budget (orcamento mensal) schemas
# - chart.py: Chart data DTOs and the YearMonth value type
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    RoleUpdate,
    UserCreate,
    UserResponse,
    UserRole,
    UserUpdate,
)

# -----------------------------------------------------------------------------
# Category Models
# -----------------------------------------------------------------------------
from .category import (
    CategoryCreate,
    CategoryResponse,
    CategoryType,
    CategoryUpdate,
)

# -----------------------------------------------------------------------------
# Expense / Income Models
# -----------------------------------------------------------------------------
from .expense import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from .income import (
    IncomeCreate,
    IncomeResponse,
    IncomeUpdate,
)

# -----------------------------------------------------------------------------
# Budget Models
# -----------------------------------------------------------------------------
from .budget import (
    MonthlyBudgetCreate,
    MonthlyBudgetResponse,
    MonthlyBudgetStatus,
    MonthlyBudgetUpdate,
)

# -----------------------------------------------------------------------------
# Chart Models
# -----------------------------------------------------------------------------
from .chart import (
    BarChartResponse,
    PieChartResponse,
    YearMonth,
)

__all__ = [
    # User
    "RoleUpdate",
    "UserCreate",
    "UserResponse",
    "UserRole",
    "UserUpdate",
    # Category
    "CategoryCreate",
    "CategoryResponse",
    "CategoryType",
    "CategoryUpdate",
    # Expense
    "ExpenseCreate",
    "ExpenseResponse",
    "ExpenseUpdate",
    # Income
    "IncomeCreate",
    "IncomeResponse",
    "IncomeUpdate",
    # Budget
    "MonthlyBudgetCreate",
    "MonthlyBudgetResponse",
    "MonthlyBudgetStatus",
    "MonthlyBudgetUpdate",
    # Chart
    "BarChartResponse",
    "PieChartResponse",
    "YearMonth",
]

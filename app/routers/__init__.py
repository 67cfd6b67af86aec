# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Own account and admin account management
# - categories.py: Category CRUD
# - expenses.py: Expense CRUD, range searches and charts
# - incomes.py: Income CRUD, range searches and charts
# - budgets.py: Monthly budget CRUD and spending status
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import categories
from . import expenses
from . import incomes
from . import budgets

__all__ = [
    "health",
    "users",
    "categories",
    "expenses",
    "incomes",
    "budgets",
]

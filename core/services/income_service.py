# =============================================================================
# core/services/income_service.py - Income Business Logic
# =============================================================================
# Incomes (receitas) use the shared lifecycle in transaction_service.py.
# =============================================================================

from app.exceptions import IncomeNotFoundError, IncomeOperationError
from core.models.income import IncomeResponse
from core.services.transaction_service import TransactionService


class IncomeService(TransactionService):
    """Service for income operations."""

    table = "incomes"
    label = "income"
    party_field = "payment_origin"
    response_model = IncomeResponse
    not_found_error = IncomeNotFoundError
    operation_error = IncomeOperationError

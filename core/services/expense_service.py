# =============================================================================
# core/services/expense_service.py - Expense Business Logic
# =============================================================================
# Expenses (despesas) use the shared lifecycle in transaction_service.py.
# =============================================================================

from app.exceptions import ExpenseNotFoundError, ExpenseOperationError
from core.models.expense import ExpenseResponse
from core.services.transaction_service import TransactionService


class ExpenseService(TransactionService):
    """
    Service for expense operations.

    Example:
        expense = ExpenseService.create(ExpenseCreate(...), user_id)
        chart = ExpenseService.bar_chart(user_id, "2024-01", "2024-06")
    """

    table = "expenses"
    label = "expense"
    party_field = "payment_destination"
    response_model = ExpenseResponse
    not_found_error = ExpenseNotFoundError
    operation_error = ExpenseOperationError

# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class FinanceAPIException(Exception):
    """
    Base exception for the Gestor Financeiro API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "FINANCE_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Common Exceptions
# =============================================================================

class InvalidDataError(FinanceAPIException):
    """Raised when a payload or argument breaks a validation rule."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_DATA",
            status_code=400,
            suggestion="Fix the highlighted value and send the request again",
            details=details,
        )


class InvalidUuidError(FinanceAPIException):
    """Raised when a record identifier is missing or blank."""

    def __init__(self):
        super().__init__(
            message="The record identifier cannot be null or empty",
            code="INVALID_UUID",
            status_code=400,
            suggestion="Send the UUID returned when the record was created",
        )


class InvalidUserIdError(FinanceAPIException):
    """Raised when a user identifier is missing or blank."""

    def __init__(self):
        super().__init__(
            message="The user identifier cannot be null or empty",
            code="INVALID_USER_ID",
            status_code=400,
            suggestion="Authenticate again to obtain a token with a valid user id",
        )


# =============================================================================
# User / Auth Exceptions
# =============================================================================

class UserNotFoundError(FinanceAPIException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user_id is correct and the account hasn't been deleted",
            details={"user_id": user_id}
        )


class EmailAlreadyRegisteredError(FinanceAPIException):
    """Raised when registering or updating to an email that is taken."""

    def __init__(self, email: str):
        super().__init__(
            message=f"Email already registered: {email}",
            code="EMAIL_ALREADY_REGISTERED",
            status_code=409,
            suggestion="Log in with this email or use a different one",
            details={"email": email}
        )


class UsernameAlreadyTakenError(FinanceAPIException):
    """Raised when registering or updating to a username that is taken."""

    def __init__(self, username: str):
        super().__init__(
            message=f"Username already taken: {username}",
            code="USERNAME_ALREADY_TAKEN",
            status_code=409,
            suggestion="Choose a different username",
            details={"username": username}
        )


class InvalidCredentialsError(FinanceAPIException):
    """Raised when login fails. Does not say which field was wrong."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check your email and password and try again",
        )


class UserOperationError(FinanceAPIException):
    """Raised when persisting a user fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="USER_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


# =============================================================================
# Category Exceptions
# =============================================================================

class CategoryNotFoundError(FinanceAPIException):
    """Raised when a category ID doesn't exist for the user."""

    def __init__(self, category_id: str):
        super().__init__(
            message=f"Category not found: {category_id}",
            code="CATEGORY_NOT_FOUND",
            status_code=404,
            suggestion="List your categories with GET /categories to find the right id",
            details={"category_id": category_id}
        )


class CategoryNameNotFoundError(FinanceAPIException):
    """Raised when a category name doesn't exist for the user."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Category not found: {name}",
            code="CATEGORY_NAME_NOT_FOUND",
            status_code=404,
            suggestion="Create the category with POST /categories before using it",
            details={"name": name}
        )


class CategoryAlreadyExistsError(FinanceAPIException):
    """Raised when a user already has a category with the same name."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Category already exists: {name}",
            code="CATEGORY_ALREADY_EXISTS",
            status_code=409,
            suggestion="Use the existing category or pick another name",
            details={"name": name}
        )


class CategoryOperationError(FinanceAPIException):
    """Raised when persisting a category fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="CATEGORY_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


# =============================================================================
# Expense Exceptions
# =============================================================================

class ExpenseNotFoundError(FinanceAPIException):
    """Raised when an expense (or a user's expense list) doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Expense not found: {identifier}",
            code="EXPENSE_NOT_FOUND",
            status_code=404,
            suggestion="Check the id, or register an expense with POST /expenses",
            details={"id": identifier}
        )


class ExpenseOperationError(FinanceAPIException):
    """Raised when reading or writing expenses fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="EXPENSE_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


# =============================================================================
# Income Exceptions
# =============================================================================

class IncomeNotFoundError(FinanceAPIException):
    """Raised when an income (or a user's income list) doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Income not found: {identifier}",
            code="INCOME_NOT_FOUND",
            status_code=404,
            suggestion="Check the id, or register an income with POST /incomes",
            details={"id": identifier}
        )


class IncomeOperationError(FinanceAPIException):
    """Raised when reading or writing incomes fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="INCOME_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


# =============================================================================
# Monthly Budget Exceptions
# =============================================================================

class MonthlyBudgetNotFoundError(FinanceAPIException):
    """Raised when a budget (or a user's budget list) doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Monthly budget not found: {identifier}",
            code="MONTHLY_BUDGET_NOT_FOUND",
            status_code=404,
            suggestion="Check the id, or create a budget with POST /budgets",
            details={"id": identifier}
        )


class MonthlyBudgetAlreadyExistsError(FinanceAPIException):
    """Raised when (user, category, period) already has a budget."""

    def __init__(self, category_name: str, period: str):
        super().__init__(
            message=f"A budget for '{category_name}' in {period} already exists",
            code="MONTHLY_BUDGET_ALREADY_EXISTS",
            status_code=409,
            suggestion="Update the existing budget instead of creating a new one",
            details={"category_name": category_name, "period": period}
        )


class MonthlyBudgetOperationError(FinanceAPIException):
    """Raised when persisting a budget fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="MONTHLY_BUDGET_OPERATION_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def finance_exception_handler(
    request: Request,
    exc: FinanceAPIException
) -> JSONResponse:
    """
    Convert FinanceAPIException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Keeps pydantic's per-field errors so clients can highlight the field.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        }
    )

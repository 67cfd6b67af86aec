# =============================================================================
# app/routers/expenses.py - Expense Endpoints
# =============================================================================
# CRUD, range searches and chart data for expenses.
# All endpoints require authentication and only touch the caller's records.
# =============================================================================

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models.budget import PERIOD_PATTERN
from core.models.chart import BarChartResponse, PieChartResponse
from core.models.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from core.services.expense_service import ExpenseService

router = APIRouter()


# =============================================================================
# Searches and Charts
# =============================================================================

@router.get("/range/dates", response_model=list[ExpenseResponse])
async def find_expenses_by_dates(
    start: Annotated[date, Query(description="First day (inclusive)")],
    end: Annotated[date, Query(description="Last day (inclusive)")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Expenses dated between start and end.

    Returns 400 if start is after end.
    """
    return ExpenseService.find_by_date_range(user.id, start, end)


@router.get("/range/values", response_model=list[ExpenseResponse])
async def find_expenses_by_values(
    min_value: Annotated[Decimal, Query(alias="min", description="Smallest amount (inclusive)")],
    max_value: Annotated[Decimal, Query(alias="max", description="Largest amount (inclusive)")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Expenses whose amount is between min and max.

    Both bounds must be positive and min must not exceed max.
    """
    return ExpenseService.find_by_value_range(user.id, min_value, max_value)


@router.get("/charts/bar", response_model=BarChartResponse)
async def expenses_bar_chart(
    start: Annotated[str, Query(pattern=PERIOD_PATTERN, description="First month (YYYY-MM)")],
    end: Annotated[str, Query(pattern=PERIOD_PATTERN, description="Last month (YYYY-MM)")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Monthly expense totals, oldest month first.

    Labels are month names in the configured chart language (e.g. "janeiro 2024").
    """
    return ExpenseService.bar_chart(user.id, start, end)


@router.get("/charts/pie", response_model=PieChartResponse)
async def expenses_pie_chart(
    start: Annotated[date, Query(description="First day (inclusive)")],
    end: Annotated[date, Query(description="Last day (inclusive)")],
    user: AuthUser = Depends(get_current_user),
):
    """Expense totals per category between two dates."""
    return ExpenseService.pie_chart(user.id, start, end)


# =============================================================================
# CRUD
# =============================================================================

@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    request: ExpenseCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Register an expense for the current user.

    Returns 400 if the amount is missing or not greater than zero.
    """
    return ExpenseService.create(request, user.id)


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(user: AuthUser = Depends(get_current_user)):
    """
    List the current user's expenses, oldest first.

    Returns 404 when the user has no expenses yet.
    """
    return ExpenseService.list_by_user(user.id)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: Annotated[UUID, Path(description="Expense UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one of the current user's expenses."""
    return ExpenseService.get(expense_id, user_id=user.id)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: Annotated[UUID, Path(description="Expense UUID")],
    request: ExpenseUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Replace every field of one of the current user's expenses."""
    return ExpenseService.update(expense_id, request, user_id=user.id)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: Annotated[UUID, Path(description="Expense UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete one of the current user's expenses."""
    ExpenseService.delete(expense_id, user_id=user.id)

# =============================================================================
# app/routers/incomes.py - Income Endpoints
# =============================================================================
# CRUD, range searches and chart data for incomes. Mirrors expenses.py.
# =============================================================================

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models.budget import PERIOD_PATTERN
from core.models.chart import BarChartResponse, PieChartResponse
from core.models.income import IncomeCreate, IncomeResponse, IncomeUpdate
from core.services.income_service import IncomeService

router = APIRouter()


@router.get("/range/dates", response_model=list[IncomeResponse])
async def find_incomes_by_dates(
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
    user: AuthUser = Depends(get_current_user),
):
    """Incomes dated between start and end (inclusive)."""
    return IncomeService.find_by_date_range(user.id, start, end)


@router.get("/range/values", response_model=list[IncomeResponse])
async def find_incomes_by_values(
    min_value: Annotated[Decimal, Query(alias="min")],
    max_value: Annotated[Decimal, Query(alias="max")],
    user: AuthUser = Depends(get_current_user),
):
    """Incomes whose amount is between min and max (inclusive)."""
    return IncomeService.find_by_value_range(user.id, min_value, max_value)


@router.get("/charts/bar", response_model=BarChartResponse)
async def incomes_bar_chart(
    start: Annotated[str, Query(pattern=PERIOD_PATTERN)],
    end: Annotated[str, Query(pattern=PERIOD_PATTERN)],
    user: AuthUser = Depends(get_current_user),
):
    """Monthly income totals, oldest month first."""
    return IncomeService.bar_chart(user.id, start, end)


@router.get("/charts/pie", response_model=PieChartResponse)
async def incomes_pie_chart(
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
    user: AuthUser = Depends(get_current_user),
):
    """Income totals per category between two dates."""
    return IncomeService.pie_chart(user.id, start, end)


@router.post("", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
async def create_income(
    request: IncomeCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Register an income for the current user."""
    return IncomeService.create(request, user.id)


@router.get("", response_model=list[IncomeResponse])
async def list_incomes(user: AuthUser = Depends(get_current_user)):
    """
    List the current user's incomes, oldest first.

    Returns 404 when the user has no incomes yet.
    """
    return IncomeService.list_by_user(user.id)


@router.get("/{income_id}", response_model=IncomeResponse)
async def get_income(
    income_id: Annotated[UUID, Path(description="Income UUID")],
    user: AuthUser = Depends(get_current_user),
):
    return IncomeService.get(income_id, user_id=user.id)


@router.put("/{income_id}", response_model=IncomeResponse)
async def update_income(
    income_id: Annotated[UUID, Path(description="Income UUID")],
    request: IncomeUpdate,
    user: AuthUser = Depends(get_current_user),
):
    return IncomeService.update(income_id, request, user_id=user.id)


@router.delete("/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_income(
    income_id: Annotated[UUID, Path(description="Income UUID")],
    user: AuthUser = Depends(get_current_user),
):
    IncomeService.delete(income_id, user_id=user.id)

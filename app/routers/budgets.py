# =============================================================================
# app/routers/budgets.py - Monthly Budget Endpoints
# =============================================================================
# CRUD for monthly budgets plus per-month spending status.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, AuthUser
from core.models.budget import (
    PERIOD_PATTERN,
    MonthlyBudgetCreate,
    MonthlyBudgetResponse,
    MonthlyBudgetStatus,
    MonthlyBudgetUpdate,
)
from core.services.budget_service import MonthlyBudgetService

router = APIRouter()

PeriodPath = Annotated[str, Path(pattern=PERIOD_PATTERN, description="Month (YYYY-MM)")]


@router.post("", response_model=MonthlyBudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    request: MonthlyBudgetCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a monthly budget for one of the user's categories.

    Returns 404 if the category name is unknown and 409 if the category
    already has a budget for that month.
    """
    return MonthlyBudgetService.create_budget(
        user.id, request.category_name, request.limit_amount, request.period
    )


@router.get("", response_model=list[MonthlyBudgetResponse])
async def list_budgets(user: AuthUser = Depends(get_current_user)):
    """
    List every budget of the current user, most recent month first.

    Returns 404 when the user has no budgets yet.
    """
    return MonthlyBudgetService.list_by_user(user.id)


@router.get("/period/{period}", response_model=list[MonthlyBudgetResponse])
async def list_budgets_by_period(
    period: PeriodPath,
    user: AuthUser = Depends(get_current_user),
):
    """List the current user's budgets for one month."""
    return MonthlyBudgetService.list_by_period(user.id, period)


@router.get("/status/{period}", response_model=list[MonthlyBudgetStatus])
async def budget_status(
    period: PeriodPath,
    user: AuthUser = Depends(get_current_user),
):
    """
    Compare each budget of a month with the expenses of that month.

    An expense counts towards a budget when its category matches the
    budget's category name.
    """
    return MonthlyBudgetService.budget_status(user.id, period)


@router.get("/{budget_id}", response_model=MonthlyBudgetResponse)
async def get_budget(
    budget_id: Annotated[UUID, Path(description="Budget UUID")],
    user: AuthUser = Depends(get_current_user),
):
    return MonthlyBudgetService.get_budget(user.id, budget_id)


@router.put("/{budget_id}", response_model=MonthlyBudgetResponse)
async def update_budget(
    budget_id: Annotated[UUID, Path(description="Budget UUID")],
    request: MonthlyBudgetUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Replace a budget's category, limit and period.

    Returns 409 if the new (category, period) pair already has another budget.
    """
    return MonthlyBudgetService.update_budget(
        user.id, budget_id, request.category_name, request.limit_amount, request.period
    )


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: Annotated[UUID, Path(description="Budget UUID")],
    user: AuthUser = Depends(get_current_user),
):
    MonthlyBudgetService.delete_budget(user.id, budget_id)

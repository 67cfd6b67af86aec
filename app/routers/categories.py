# =============================================================================
# app/routers/categories.py - Category Endpoints
# =============================================================================
# CRUD for the current user's categories.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryType,
    CategoryUpdate,
)
from core.services.category_service import CategoryService

router = APIRouter()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a category.

    Returns 409 if the user already has a category with this name.
    """
    return CategoryService.create_category(user.id, request)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    user: AuthUser = Depends(get_current_user),
    type: Annotated[CategoryType | None, Query(description="Filter by type")] = None,
):
    """List the current user's categories, ordered by name."""
    return CategoryService.list_categories(user.id, type)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: Annotated[UUID, Path(description="Category UUID")],
    user: AuthUser = Depends(get_current_user),
):
    return CategoryService.get_category(user.id, category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: Annotated[UUID, Path(description="Category UUID")],
    request: CategoryUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Rename and/or re-type a category."""
    return CategoryService.update_category(user.id, category_id, request)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: Annotated[UUID, Path(description="Category UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a category.

    Budgets that use it are deleted with it.
    """
    CategoryService.delete_category(user.id, category_id)

# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# /users/me: the caller's own account (any authenticated user)
# /users/admin/...: account administration (ADMIN role only)
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.dependencies import AdminUser, CurrentUser
from core.models.user import RoleUpdate, UserResponse, UserUpdate
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

UserIdPath = Annotated[UUID, Path(description="User UUID")]


# =============================================================================
# Current User
# =============================================================================

@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUser):
    """Get the current user's account."""
    return UserService.get_user(user.id)


@router.patch("/me", response_model=UserResponse)
async def update_me(request: UserUpdate, user: CurrentUser):
    """
    Update the current user's username, email and/or password.

    Tokens already issued keep the old email claim until they expire.
    """
    return UserService.update_user(user.id, request)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(user: CurrentUser):
    """Delete the current user's account and all of its records."""
    UserService.delete_user(user.id)


# =============================================================================
# Administration
# =============================================================================

@router.get("/admin", response_model=list[UserResponse])
async def list_users(admin: AdminUser):
    """List every account."""
    return UserService.list_users()


@router.get("/admin/{user_id}", response_model=UserResponse)
async def get_user(user_id: UserIdPath, admin: AdminUser):
    return UserService.get_user(user_id)


@router.patch("/admin/{user_id}/role", response_model=UserResponse)
async def change_role(user_id: UserIdPath, request: RoleUpdate, admin: AdminUser):
    """Promote an account to ADMIN or demote it to USER."""
    logger.info(f"Admin {admin.id} setting role of {user_id} to {request.role.value}")
    return UserService.change_role(user_id, request.role)


@router.delete("/admin/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UserIdPath, admin: AdminUser):
    UserService.delete_user(user_id)

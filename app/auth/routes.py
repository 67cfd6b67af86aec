# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for registration, login and token introspection.
# /register and /login are public; /me and /verify need a bearer token.
# =============================================================================

import logging
from fastapi import APIRouter, Depends, status

from app.config import settings
from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, LoginRequest, TokenResponse
from core.models.user import UserCreate, UserResponse
from core.services.user_service import UserService
from lib.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: UserCreate) -> UserResponse:
    """
    Create a new account with the USER role.

    Raises:
        409: If the email or username is already taken
    """
    return UserService.register(request)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Exchange email and password for an access token.

    Raises:
        401: If the credentials are wrong
    """
    user = UserService.authenticate(request.email, request.password)
    token = create_access_token(user.id, user.email, user.role.value)

    logger.info(f"User logged in: {user.id}")
    return TokenResponse(
        access_token=token,
        expires_in=settings.access_token_expire_seconds,
        user=user,
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account was deleted after the token was issued
    """
    return UserService.get_user(user.id)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
        "role": user.role.value,
    }

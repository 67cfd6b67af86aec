# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides stateless JWT authentication: bcrypt-checked login issues an
# HS256 access token, and every protected route validates it.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user, get_current_user_optional, require_admin
from app.auth.models import AuthUser, LoginRequest, TokenResponse
from core.models.user import UserResponse

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "require_admin",
    "AuthUser",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
]

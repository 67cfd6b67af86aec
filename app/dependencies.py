# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection aliases.
# These are injected into route handlers as annotated parameters.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user, require_admin

# Any authenticated user
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]

# Authenticated user with the ADMIN role
AdminUser = Annotated[AuthUser, Depends(require_admin)]

# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# Type aliases for dependency injection into route handlers.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_user, get_current_user_optional


# The authenticated caller (401 without a valid token)
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]

# The caller if a valid token was sent, else None
OptionalUser = Annotated[AuthUser | None, Depends(get_current_user_optional)]

# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Clerk client-side.
# These routes are for getting user info after authentication.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from core.models.user import User
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=User)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> User:
    """
    Get the current authenticated user's record.

    Returns:
        User: id, email, names, user_type and onboarding state

    Raises:
        401: If not authenticated
    """
    record = UserService.get_user(user.id)
    if record:
        return record

    # User exists in Clerk but the webhook hasn't created the row yet
    logger.debug(f"No users row yet for {user.id}")
    return User(id=user.id)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.id,
        "session_id": user.session_id,
    }

# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Clerk session token.

    This is the minimal user info available from the token itself,
    without querying the database. The role (creator/business) lives in
    the users table and is checked by the services.
    """

    model_config = ConfigDict(frozen=True)

    id: str  # Clerk user ID, e.g. "user_2abc..."
    session_id: str | None = None


class TokenPayload(BaseModel):
    """
    Decoded session token payload.

    Clerk session tokens carry the standard claims plus the session ID.
    """
    sub: str  # User ID
    sid: str | None = None  # Session ID
    iss: str | None = None
    exp: int
    iat: int | None = None

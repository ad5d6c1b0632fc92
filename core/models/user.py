# =============================================================================
# core/models/user.py - User, Onboarding and Profile Schemas
# =============================================================================
# Users are mirrored from the identity provider via webhooks. A user picks a
# side of the marketplace (creator or business) during onboarding, which
# also creates the matching profile row.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class UserType(str, Enum):
    """
    Which side of the marketplace a user is on.

    A user has no type until onboarding completes.
    """
    CREATOR = "creator"
    BUSINESS = "business"


class User(BaseModel):
    """A row of the users table."""

    id: str
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    user_type: UserType | None = None
    onboarding_complete: bool = False
    created_at: datetime | None = None


class OnboardingRequest(BaseModel):
    """
    Request body for POST /onboarding/complete.

    user_type is validated by the service so an unknown value gets the
    same "Invalid user type" error the UI expects.

    Example:
        {
            "user_type": "creator",
            "username": "amy",
            "city": "Paris",
            "country": "France",
            "bio": "Food and travel vlogs"
        }
    """

    user_type: str = Field(..., examples=["creator"])
    username: str = Field(..., min_length=1, max_length=50)
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)

    # Creator-only fields (ignored for businesses)
    bio: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None
    tiktok_url: str | None = None
    other_url: str | None = None


class ProfileUpdate(BaseModel):
    """
    Request body for PATCH /profile.

    bio and the social links only apply to creator profiles.
    """

    city: str | None = Field(default=None, min_length=1)
    country: str | None = Field(default=None, min_length=1)
    bio: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None
    tiktok_url: str | None = None
    other_url: str | None = None


CREATOR_ONLY_FIELDS = ("bio", "instagram_url", "youtube_url", "tiktok_url", "other_url")

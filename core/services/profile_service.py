# =============================================================================
# core/services/profile_service.py - Profiles and Onboarding
# =============================================================================
# Each user has exactly one profile, in creator_profiles or
# business_profiles depending on their user_type. Onboarding creates it.
# Usernames are unique across both tables.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    DatastoreError,
    InvalidUserTypeError,
    NotFoundError,
    UsernameTakenError,
)
from core.models.user import CREATOR_ONLY_FIELDS, OnboardingRequest, ProfileUpdate, UserType
from core.services.user_service import UserService
from lib.clerk_client import ClerkClient, ClerkClientError
from lib.supabase_client import SupabaseClient, is_unique_violation

logger = logging.getLogger(__name__)

PROFILE_TABLES = {
    UserType.CREATOR: "creator_profiles",
    UserType.BUSINESS: "business_profiles",
}


class ProfileService:
    """Service for the current user's profile."""

    @staticmethod
    def username_taken(username: str) -> bool:
        """Check both profile tables for a username."""
        return any(
            SupabaseClient.fetch_single(table, "username", username, columns="username")
            for table in PROFILE_TABLES.values()
        )

    @staticmethod
    def get_profile(user_id: str) -> tuple[dict[str, Any], UserType]:
        """
        Get the user's profile and user type.

        Raises:
            NotFoundError: If the user or profile doesn't exist
        """
        user = UserService.get_user(user_id)
        if not user:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        if not user.user_type:
            raise NotFoundError("Profile not found", code="PROFILE_NOT_FOUND")

        profile = SupabaseClient.fetch_single(PROFILE_TABLES[user.user_type], "user_id", user_id)
        if not profile:
            raise NotFoundError("Profile not found", code="PROFILE_NOT_FOUND")

        return profile, user.user_type

    @staticmethod
    def update_profile(user_id: str, request: ProfileUpdate) -> dict[str, Any]:
        """
        Update the user's profile.

        Creator-only fields (bio, social links) are ignored for businesses;
        for creators, blank values clear them.

        Raises:
            NotFoundError: If the user or profile doesn't exist
        """
        profile, user_type = ProfileService.get_profile(user_id)

        changes = request.model_dump(exclude_unset=True)
        if user_type == UserType.CREATOR:
            for key in CREATOR_ONLY_FIELDS:
                if key in changes:
                    changes[key] = changes[key] or None
        else:
            changes = {k: v for k, v in changes.items() if k not in CREATOR_ONLY_FIELDS}

        if not changes:
            return profile

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PROFILE_TABLES[user_type])
                .update(changes)
                .eq("user_id", user_id)
                .execute()
            )

            if response.data:
                logger.info(f"Updated {user_type.value} profile for {user_id}")
                return response.data[0]

            return {**profile, **changes}

        except Exception as e:
            logger.error(f"Error updating profile for {user_id}: {e}")
            raise DatastoreError("Failed to update profile", str(e))

    @staticmethod
    def _create_profile(user_id: str, user_type: UserType, request: OnboardingRequest) -> dict[str, Any]:
        client = SupabaseClient.get_client()

        data: dict[str, Any] = {
            "user_id": user_id,
            "username": request.username,
            "city": request.city,
            "country": request.country,
        }
        if user_type == UserType.CREATOR:
            for key in CREATOR_ONLY_FIELDS:
                data[key] = getattr(request, key) or None

        try:
            response = client.table(PROFILE_TABLES[user_type]).insert(data).execute()
            return response.data[0] if response.data else data
        except Exception as e:
            if is_unique_violation(e):
                raise UsernameTakenError(request.username)
            logger.error(f"Error creating {user_type.value} profile: {e}")
            raise DatastoreError("Failed to create profile", str(e))

    @staticmethod
    def complete_onboarding(user_id: str, request: OnboardingRequest) -> dict[str, Any]:
        """
        Complete onboarding for a user.

        1. Validate the chosen user type
        2. Make sure the users row exists (the webhook may not have landed)
        3. Reject usernames already used by any profile
        4. Create the creator or business profile
        5. Mark the user onboarded and mirror that into Clerk metadata

        Returns:
            The created profile row

        Raises:
            InvalidUserTypeError: If user_type isn't creator/business
            UsernameTakenError: If the username is in use
        """
        try:
            user_type = UserType(request.user_type)
        except ValueError:
            raise InvalidUserTypeError(request.user_type)

        UserService.ensure_user(user_id)

        if ProfileService.username_taken(request.username):
            raise UsernameTakenError(request.username)

        profile = ProfileService._create_profile(user_id, user_type, request)
        UserService.mark_onboarded(user_id, user_type)

        try:
            ClerkClient.update_public_metadata(user_id, {
                "user_type": user_type.value,
                "onboarding_complete": True,
            })
        except ClerkClientError as e:
            # The database is the source of truth for user_type
            logger.warning(f"Could not update Clerk metadata for {user_id}: {e}")

        logger.info(f"User {user_id} onboarded as {user_type.value}")
        return profile

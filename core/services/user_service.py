# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles the users table: role checks for every endpoint, and the
# create/update/delete events mirrored from the identity provider.
# =============================================================================

import logging
from typing import Any

from app.exceptions import DatastoreError, ForbiddenError
from core.models.user import User, UserType
from lib.clerk_client import ClerkClient, primary_email
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# How each side of the marketplace is named in error messages
ROLE_LABELS = {
    UserType.CREATOR: "creators",
    UserType.BUSINESS: "business owners",
}


class UserService:
    """
    Service for user records and role checks.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def get_user(user_id: str) -> User | None:
        """
        Get a user by ID.

        Returns:
            User, or None if the users row doesn't exist yet
        """
        row = SupabaseClient.fetch_user(user_id)
        return User.model_validate(row) if row else None

    @staticmethod
    def require_user_type(user_id: str, user_type: UserType, action: str) -> User:
        """
        Ensure the user exists and is on the given side of the marketplace.

        Args:
            user_id: The caller's user ID
            user_type: Required user type
            action: What the caller is trying to do, e.g. "apply to jobs"

        Returns:
            The User

        Raises:
            ForbiddenError: "Only creators can apply to jobs" etc.
        """
        user = UserService.get_user(user_id)

        if not user or user.user_type != user_type:
            logger.info(f"User {user_id} denied: requires {user_type.value} to {action}")
            raise ForbiddenError(
                f"Only {ROLE_LABELS[user_type]} can {action}",
                details={"required_user_type": user_type.value},
            )

        return user

    # -------------------------------------------------------------------------
    # Identity-provider events
    # -------------------------------------------------------------------------

    @staticmethod
    def _row_from_identity(data: dict[str, Any]) -> dict[str, Any]:
        """Map a Clerk user object to users table columns."""
        return {
            "email": primary_email(data),
            "first_name": data.get("first_name") or None,
            "last_name": data.get("last_name") or None,
        }

    @staticmethod
    def create_user(data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a users row for a newly created identity-provider user.

        Args:
            data: Clerk user object (id, email_addresses, first_name, last_name)

        Returns:
            Inserted users row

        Raises:
            DatastoreError: If the insert fails
        """
        client = SupabaseClient.get_client()

        row = {
            "id": data["id"],
            **UserService._row_from_identity(data),
            "user_type": None,
            "onboarding_complete": False,
        }

        try:
            response = client.table("users").insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create user {data['id']}: {e}")
            raise DatastoreError("Error creating user", str(e))

        logger.info(f"User {data['id']} created successfully")
        return response.data[0] if response.data else row

    @staticmethod
    def update_user(data: dict[str, Any]) -> None:
        """
        Sync email and names from an updated identity-provider user.

        Failures are logged and not raised; the next update event
        will carry the full state again.
        """
        client = SupabaseClient.get_client()

        try:
            client.table("users").update(
                UserService._row_from_identity(data)
            ).eq("id", data["id"]).execute()
            logger.info(f"User {data['id']} updated")
        except Exception as e:
            logger.error(f"Error updating user {data.get('id')}: {e}")

    @staticmethod
    def delete_user(user_id: str) -> None:
        """
        Delete a user row. Profiles, travels, jobs and applications
        cascade in the database.

        Failures are logged and not raised.
        """
        client = SupabaseClient.get_client()

        try:
            client.table("users").delete().eq("id", user_id).execute()
            logger.info(f"User {user_id} deleted")
        except Exception as e:
            logger.error(f"Error deleting user {user_id}: {e}")

    @staticmethod
    def ensure_user(user_id: str) -> User:
        """
        Get the users row, creating it from Clerk if the webhook hasn't yet.

        Raises:
            ClerkClientError: If the user can't be fetched from Clerk
            DatastoreError: If the row can't be created
        """
        user = UserService.get_user(user_id)
        if user:
            return user

        clerk_user = ClerkClient.get_user(user_id)
        row = UserService.create_user({**clerk_user, "id": user_id})
        logger.info(f"User {user_id} created in database during onboarding")
        return User.model_validate(row)

    @staticmethod
    def mark_onboarded(user_id: str, user_type: UserType) -> None:
        """
        Record the user's chosen side and mark onboarding complete.

        Raises:
            DatastoreError: If the update fails
        """
        client = SupabaseClient.get_client()

        try:
            client.table("users").update({
                "user_type": user_type.value,
                "onboarding_complete": True,
            }).eq("id", user_id).execute()
        except Exception as e:
            logger.error(f"Error updating user {user_id}: {e}")
            raise DatastoreError("Failed to update user", str(e))

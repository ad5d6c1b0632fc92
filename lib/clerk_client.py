# =============================================================================
# lib/clerk_client.py - Clerk Backend API Wrapper
# =============================================================================
# Thin httpx wrapper around the two identity-provider calls the API needs:
# - Reading a user's profile (email, names) during onboarding
# - Mirroring user_type / onboarding_complete into public metadata
#
# Usage:
#   from lib.clerk_client import ClerkClient
#   user = ClerkClient.get_user("user_2abc")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


class ClerkClientError(ApplicationError):
    """Error calling the Clerk Backend API."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code=kwargs.pop("code", "CLERK_ERROR"), **kwargs)


class ClerkClient:
    """
    Class-method wrapper for the Clerk Backend API.

    Authenticates with CLERK_SECRET_KEY. Every call is a single synchronous
    request with no retries.
    """

    @classmethod
    def _headers(cls) -> dict[str, str]:
        if not settings.CLERK_SECRET_KEY:
            raise ClerkClientError(
                "CLERK_SECRET_KEY is not configured",
                code="CLERK_NOT_CONFIGURED",
                suggestion="Set CLERK_SECRET_KEY in your .env file",
            )
        return {"Authorization": f"Bearer {settings.CLERK_SECRET_KEY}"}

    @classmethod
    def _url(cls, path: str) -> str:
        return f"{settings.CLERK_API_URL.rstrip('/')}{path}"

    @classmethod
    def get_user(cls, user_id: str) -> dict[str, Any]:
        """
        Fetch a user from Clerk.

        Returns:
            Raw Clerk user object (email_addresses, first_name, last_name, ...)

        Raises:
            ClerkClientError: If the request fails
        """
        try:
            response = httpx.get(
                cls._url(f"/users/{user_id}"),
                headers=cls._headers(),
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise ClerkClientError(
                f"Failed to fetch Clerk user: {e}",
                code="CLERK_FETCH_USER_FAILED",
                details={"user_id": user_id},
            )

    @classmethod
    def update_public_metadata(cls, user_id: str, metadata: dict[str, Any]) -> dict[str, Any]:
        """
        Merge values into a user's public metadata.

        Raises:
            ClerkClientError: If the request fails
        """
        try:
            response = httpx.patch(
                cls._url(f"/users/{user_id}/metadata"),
                headers=cls._headers(),
                json={"public_metadata": metadata},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            logger.debug(f"Updated Clerk metadata for {user_id}: {metadata}")
            return response.json()
        except httpx.HTTPError as e:
            raise ClerkClientError(
                f"Failed to update Clerk metadata: {e}",
                code="CLERK_UPDATE_METADATA_FAILED",
                details={"user_id": user_id},
            )


def primary_email(clerk_user: dict[str, Any]) -> str:
    """
    Pick the email address to store for a Clerk user.

    Prefers the address flagged as primary, falls back to the first one,
    and returns "" when the user has none.
    """
    addresses = clerk_user.get("email_addresses") or []
    primary_id = clerk_user.get("primary_email_address_id")
    for address in addresses:
        if primary_id and address.get("id") == primary_id:
            return address.get("email_address", "")
    if addresses:
        return addresses[0].get("email_address", "")
    return ""

# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the lookups shared by every service:
# - Single-row fetches that treat "no rows" as None
# - User records (role checks, onboarding state)
# - Error classification for PostgREST / Postgres failures
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user = SupabaseClient.fetch_user(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for ".single()" matching zero rows
NO_ROWS_CODE = "PGRST116"

# Postgres SQLSTATE for unique constraint violations
UNIQUE_VIOLATION_CODE = "23505"

# Postgres SQLSTATE for malformed input, e.g. a non-UUID id
INVALID_INPUT_CODE = "22P02"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_no_rows_error(error: Exception) -> bool:
    """Check if an error is PostgREST's "no rows returned" for .single()."""
    return NO_ROWS_CODE in str(error)


def is_invalid_input(error: Exception) -> bool:
    """Check if an error is Postgres rejecting a value's syntax (bad UUID etc.)."""
    return INVALID_INPUT_CODE in str(error)


def is_unique_violation(error: Exception) -> bool:
    """Check if an error is a Postgres unique constraint violation."""
    return UNIQUE_VIOLATION_CODE in str(error) or "duplicate key" in str(error)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Fetch a creator profile by username
        creator = SupabaseClient.fetch_single("creator_profiles", "username", "amy")

        # Check the caller's role
        user = SupabaseClient.fetch_user("user_2abc")
        is_creator = user is not None and user["user_type"] == "creator"
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Generic Lookups
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_single(
        cls,
        table: str,
        column: str,
        value: Any,
        columns: str = "*",
        **filters: Any,
    ) -> dict[str, Any] | None:
        """
        Fetch exactly one row where `column == value`.

        Extra keyword filters are applied as additional equality checks,
        e.g. fetch_single("applications", "job_id", job_id, creator_id=user_id).

        Args:
            table: Table name
            column: Column to match
            value: Value to match
            columns: Select clause (default: all columns)

        Returns:
            Row dict, or None if no row matched or the value is malformed

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns).eq(column, str(value))
            for name, filter_value in filters.items():
                query = query.eq(name, str(filter_value))

            response = query.single().execute()
            return response.data

        except Exception as e:
            # No row matched, or the value can't identify any row
            if is_no_rows_error(e) or is_invalid_input(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, column: str(value), **filters}
            )

    # -------------------------------------------------------------------------
    # User Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str) -> dict[str, Any] | None:
        """
        Fetch a user row by identity-provider user ID.

        Args:
            user_id: The user ID (the JWT "sub" claim)

        Returns:
            User dict with id, email, names, user_type and
            onboarding_complete, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        return cls.fetch_single("users", "id", user_id)

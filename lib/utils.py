# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, timezone
from typing import Any


# =============================================================================
# Date Utilities
# =============================================================================

def utc_today() -> date:
    """
    Get today's date in UTC.

    All travel windows and expiry checks are evaluated against the UTC
    calendar date, matching the ISO dates stored in the database.
    """
    return datetime.now(timezone.utc).date()


def parse_date(value: str | date | None) -> date | None:
    """
    Parse an ISO date (or timestamp) into a date.

    Args:
        value: "2024-06-01", "2024-06-01T10:00:00Z", a date, or None

    Returns:
        The parsed date, or None if value is empty

    Raises:
        ValueError: If value is a non-empty string that isn't an ISO date

    Example:
        parse_date("2024-06-01")            # date(2024, 6, 1)
        parse_date("2024-06-01T10:00:00Z")  # date(2024, 6, 1)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def blank_to_none(value: str | None) -> str | None:
    """Map empty or whitespace-only strings to None; other values pass through unchanged."""
    if value is None or not value.strip():
        return None
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }

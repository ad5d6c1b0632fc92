# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the shape:
#   {"error": "<message>", "code": "<CODE>", "suggestion"?: ..., "details"?: ...}
#
# Status codes:
#   400 - validation (missing fields, bad dates, duplicates)
#   401 - not authenticated (raised by app.auth)
#   403 - wrong role for the action
#   404 - not found, or not the owner of the resource
#   500 - datastore / identity-provider failure
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class MarketplaceException(Exception):
    """
    Base exception for the marketplace API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKETPLACE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Not Found / Authorization
# =============================================================================

class NotFoundError(MarketplaceException):
    """
    Raised when a resource doesn't exist or the caller doesn't own it.

    Ownership failures use 404 too, so callers can't probe for IDs.
    """

    def __init__(self, message: str, code: str = "NOT_FOUND", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
            details=details,
        )


class ForbiddenError(MarketplaceException):
    """Raised when the caller's user type can't perform the action."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            details=details,
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(MarketplaceException):
    """Base class for 400 errors caused by the request content."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class MissingFieldsError(ValidationError):
    """Raised when required fields are missing or blank."""

    def __init__(self, message: str = "Missing required fields", fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="MISSING_FIELDS",
            details={"fields": fields} if fields else None,
        )


class InvalidDateRangeError(ValidationError):
    """Raised when a travel ends before it starts."""

    def __init__(self, start_date: Any, end_date: Any):
        super().__init__(
            message="End date must be after start date",
            code="INVALID_DATE_RANGE",
            suggestion="Pick an end date on or after the start date",
            details={"start_date": str(start_date), "end_date": str(end_date)},
        )


class InvalidUserTypeError(ValidationError):
    """Raised when onboarding with a user type other than creator/business."""

    def __init__(self, user_type: str):
        super().__init__(
            message="Invalid user type",
            code="INVALID_USER_TYPE",
            suggestion="Use 'creator' or 'business'",
            details={"user_type": user_type},
        )


class UsernameTakenError(ValidationError):
    """Raised when a username already exists on any profile."""

    def __init__(self, username: str):
        super().__init__(
            message="Username already taken",
            code="USERNAME_TAKEN",
            suggestion="Choose a different username",
            details={"username": username},
        )


class AlreadyAppliedError(ValidationError):
    """Raised when a creator applies to the same job twice."""

    def __init__(self, job_id: str):
        super().__init__(
            message="You have already applied to this job",
            code="ALREADY_APPLIED",
            details={"job_id": job_id},
        )


class AlreadySavedError(ValidationError):
    """Raised when a creator saves the same job twice."""

    def __init__(self, job_id: str):
        super().__init__(
            message="Job already saved",
            code="ALREADY_SAVED",
            details={"job_id": job_id},
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class DatastoreError(MarketplaceException):
    """Raised when a database operation fails."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(
            message=message,
            code="DATASTORE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error} if error else None,
        )


class WebhookError(MarketplaceException):
    """Raised when an identity-provider webhook can't be accepted."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(
            message=message,
            code="WEBHOOK_ERROR",
            status_code=status_code,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def marketplace_exception_handler(
    request: Request,
    exc: MarketplaceException
) -> JSONResponse:
    """
    Convert MarketplaceException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Missing or malformed body fields are reported as 400, like every
    other validation failure in the API.
    """
    fields = [
        ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required fields"
            if any(error.get("type") == "missing" for error in exc.errors())
            else "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"fields": fields},
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Render framework HTTP errors (401 from auth, 404 for unknown routes)
    in the same shape as MarketplaceException.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": f"HTTP_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )

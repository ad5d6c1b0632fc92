# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,  # ... means required (no default)
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_ANON_KEY: str = Field(
        default="",
        description="Supabase anon/public API key (only needed by browser clients)"
    )

    # -------------------------------------------------------------------------
    # Clerk (Identity Provider) Configuration
    # -------------------------------------------------------------------------

    CLERK_SECRET_KEY: str = Field(
        default="",
        description="Clerk secret key for the Backend API (sk_...)"
    )

    CLERK_JWKS_URL: str = Field(
        default="",
        description="JWKS endpoint used to verify session tokens "
                    "(e.g., https://<frontend-api>/.well-known/jwks.json)"
    )

    CLERK_ISSUER: str = Field(
        default="",
        description="Expected 'iss' claim of session tokens (empty = don't check)"
    )

    CLERK_API_URL: str = Field(
        default="https://api.clerk.com/v1",
        description="Clerk Backend API base URL"
    )

    CLERK_WEBHOOK_SECRET: str = Field(
        default="",
        description="Signing secret for user lifecycle webhooks (whsec_...)"
    )

    # -------------------------------------------------------------------------
    # Discovery Settings
    # -------------------------------------------------------------------------

    TRAVEL_VISIBILITY_DAYS: int = Field(
        default=30,
        ge=0,
        le=365,
        description="Days before a travel's start_date that the creator "
                    "becomes discoverable at the destination"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        # The .env file is shared with the frontend
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Handles comma-separated values and strips whitespace.
        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()

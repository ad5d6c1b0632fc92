# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - clerk_client.py: Identity-provider (Clerk) backend API wrapper
# - discovery.py: Creator discovery and travel matching (pure functions)
# - utils.py: Shared utilities (dates, base error class)
#
# These modules are self-contained and can be tested in isolation.
# discovery.py depends on core.models, so import it directly:
#   from lib.discovery import discover
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.clerk_client import ClerkClient, ClerkClientError
from lib.utils import ApplicationError, blank_to_none, parse_date, utc_today

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Clerk
    "ClerkClient",
    "ClerkClientError",
    # Utils
    "ApplicationError",
    "blank_to_none",
    "parse_date",
    "utc_today",
]

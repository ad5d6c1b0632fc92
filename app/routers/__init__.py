# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - creators.py: Creator discovery and public profiles
# - travels.py: Creator travel itineraries
# - jobs.py: Job postings and applicant review
# - applications.py: Applying to and saving jobs
# - profile.py: Onboarding, profile editing and dashboard
# - webhooks.py: Identity-provider user lifecycle events
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import creators
from . import travels
from . import jobs
from . import applications
from . import profile
from . import webhooks

__all__ = [
    "health",
    "creators",
    "travels",
    "jobs",
    "applications",
    "profile",
    "webhooks",
]

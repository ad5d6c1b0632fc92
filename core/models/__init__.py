# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - creator.py: Creator profiles, travels and discovery results
# - user.py: Users, onboarding and profile updates
# - job.py: Job postings and job references
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Creator Models - Profiles, travels, discovery
# -----------------------------------------------------------------------------
from .creator import (
    CreatorProfile,
    DiscoveryCriteria,
    DiscoveryResult,
    Travel,
    TravelCreate,
    TravelUpdate,
)

# -----------------------------------------------------------------------------
# User Models - Identity mirror, onboarding, profile edits
# -----------------------------------------------------------------------------
from .user import (
    OnboardingRequest,
    ProfileUpdate,
    User,
    UserType,
)

# -----------------------------------------------------------------------------
# Job Models - Postings, applications, saves
# -----------------------------------------------------------------------------
from .job import (
    JobCreate,
    JobReference,
    JobUpdate,
)

__all__ = [
    # Creator
    "CreatorProfile",
    "DiscoveryCriteria",
    "DiscoveryResult",
    "Travel",
    "TravelCreate",
    "TravelUpdate",
    # User
    "OnboardingRequest",
    "ProfileUpdate",
    "User",
    "UserType",
    # Job
    "JobCreate",
    "JobReference",
    "JobUpdate",
]

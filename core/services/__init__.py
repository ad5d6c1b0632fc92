# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .creator_service import CreatorService
from .travel_service import TravelService
from .job_service import JobService
from .application_service import ApplicationService, SavedJobService
from .profile_service import ProfileService

__all__ = [
    "UserService",
    "CreatorService",
    "TravelService",
    "JobService",
    "ApplicationService",
    "SavedJobService",
    "ProfileService",
]

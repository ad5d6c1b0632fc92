# =============================================================================
# app/routers/profile.py - Onboarding, Profile and Dashboard Endpoints
# =============================================================================
# Endpoints for the signed-in user's own account:
# - POST /onboarding/complete: pick creator/business and create the profile
# - GET/PATCH /profile: read and edit the profile
# - GET /dashboard: jobs (business) or applications (creator)
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CurrentUser
from app.exceptions import ForbiddenError
from core.models.user import OnboardingRequest, ProfileUpdate, UserType
from core.services.application_service import ApplicationService
from core.services.job_service import JobService
from core.services.profile_service import ProfileService
from core.services.user_service import UserService

router = APIRouter()


@router.post("/onboarding/complete")
async def complete_onboarding(request: OnboardingRequest, user: CurrentUser):
    """
    Complete onboarding.

    Creates the creator or business profile. Usernames must be unique
    across both kinds of profile.
    """
    profile = ProfileService.complete_onboarding(user.id, request)

    return {
        "success": True,
        "user_type": request.user_type,
        "profile": profile,
        "message": "Onboarding completed successfully",
    }


@router.get("/profile")
async def get_profile(user: CurrentUser):
    """Get the current user's profile and user type."""
    profile, user_type = ProfileService.get_profile(user.id)
    return {"profile": profile, "user_type": user_type.value}


@router.patch("/profile")
async def update_profile(request: ProfileUpdate, user: CurrentUser):
    """
    Update the current user's profile.

    Bio and social links only apply to creators.
    """
    profile = ProfileService.update_profile(user.id, request)
    return {"success": True, "profile": profile}


@router.get("/dashboard")
async def get_dashboard(user: CurrentUser):
    """
    Get the dashboard data for the current user.

    Business owners get their posted jobs; creators get their applications.
    """
    record = UserService.get_user(user.id)
    if not record or not record.onboarding_complete or not record.user_type:
        raise ForbiddenError("Complete onboarding first")

    if record.user_type == UserType.BUSINESS:
        return {"user_type": record.user_type.value, "jobs": JobService.list_owner_jobs(user.id)}

    return {
        "user_type": record.user_type.value,
        "applications": ApplicationService.list_applications(user.id),
    }

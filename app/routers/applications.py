# =============================================================================
# app/routers/applications.py - Application and Saved Job Endpoints
# =============================================================================
# Creators apply to jobs and bookmark them.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.dependencies import CurrentUser
from core.models.job import JobReference
from core.models.user import UserType
from core.services.application_service import ApplicationService, SavedJobService
from core.services.user_service import UserService

applications_router = APIRouter()
saved_jobs_router = APIRouter()


# =============================================================================
# Applications
# =============================================================================

@applications_router.post("", status_code=status.HTTP_201_CREATED)
async def apply_to_job(request: JobReference, user: CurrentUser):
    """
    Apply to a job. Creators only, once per job.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "apply to jobs")
    application = ApplicationService.apply(user.id, request.job_id)

    return {"success": True, "application": application}


@applications_router.get("")
async def list_applications(user: CurrentUser):
    """
    List the creator's applications with their jobs, newest first.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "view applications")
    return {"applications": ApplicationService.list_applications(user.id)}


# =============================================================================
# Saved Jobs
# =============================================================================

@saved_jobs_router.post("", status_code=status.HTTP_201_CREATED)
async def save_job(request: JobReference, user: CurrentUser):
    """
    Save a job. Creators only, once per job.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "save jobs")
    saved_job = SavedJobService.save(user.id, request.job_id)

    return {"success": True, "saved_job": saved_job}


@saved_jobs_router.delete("")
async def unsave_job(
    user: CurrentUser,
    job_id: Annotated[str | None, Query(description="Job to unsave")] = None,
):
    """
    Remove a saved job.
    """
    SavedJobService.unsave(user.id, job_id)
    return {"success": True}


@saved_jobs_router.get("")
async def list_saved_jobs(user: CurrentUser):
    """
    List the creator's saved jobs, newest first.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "save jobs")
    return {"saved_jobs": SavedJobService.list_saved(user.id)}

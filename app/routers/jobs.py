# =============================================================================
# app/routers/jobs.py - Job Posting Endpoints
# =============================================================================
# Businesses post and manage jobs and review applicants; creators browse
# them. Role checks use the user_type stored in the users table.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUser, OptionalUser
from core.models.job import JobCreate, JobUpdate
from core.models.user import UserType
from core.services.application_service import ApplicationService, SavedJobService
from core.services.job_service import JobService
from core.services.user_service import UserService

router = APIRouter()

JobId = Annotated[str, Path(description="Job ID")]


@router.get("")
async def list_jobs(user: CurrentUser):
    """
    List all jobs, newest first. Creators only.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "view jobs")
    return {"jobs": JobService.list_jobs()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(request: JobCreate, user: CurrentUser):
    """
    Post a new job. Business owners only.
    """
    UserService.require_user_type(user.id, UserType.BUSINESS, "post jobs")
    job = JobService.create_job(user.id, request)

    return {"success": True, "job": job}


@router.get("/{job_id}")
async def get_job(job_id: JobId, user: OptionalUser):
    """
    Get a job.

    Signed-in creators also get whether they've applied to and saved it.
    """
    job = JobService.get_job(job_id)

    response = {"job": job}
    record = UserService.get_user(user.id) if user else None
    if record and record.user_type == UserType.CREATOR:
        response["has_applied"] = ApplicationService.has_applied(user.id, job_id)
        response["has_saved"] = SavedJobService.has_saved(user.id, job_id)

    return response


@router.patch("/{job_id}")
async def update_job(job_id: JobId, request: JobUpdate, user: CurrentUser):
    """
    Update a job. Only the business owner who posted it can update it.
    """
    UserService.require_user_type(user.id, UserType.BUSINESS, "update jobs")
    job = JobService.update_job(user.id, job_id, request)

    return {"success": True, "job": job}


@router.delete("/{job_id}")
async def delete_job(job_id: JobId, user: CurrentUser):
    """
    Delete a job. Only the business owner who posted it can delete it.
    """
    UserService.require_user_type(user.id, UserType.BUSINESS, "delete jobs")
    JobService.delete_job(user.id, job_id)

    return {"success": True}


@router.get("/{job_id}/applications")
async def list_job_applications(job_id: JobId, user: CurrentUser):
    """
    Review the applicants to a job, newest first, with their creator profiles.
    """
    UserService.require_user_type(user.id, UserType.BUSINESS, "review applicants")
    return {"applications": JobService.list_applicants(user.id, job_id)}

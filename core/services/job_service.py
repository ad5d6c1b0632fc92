# =============================================================================
# core/services/job_service.py - Job Business Logic
# =============================================================================
# Handles job postings (jobs table). Only the business owner who posted a
# job can edit, delete, or review applicants for it.
# =============================================================================

import logging
from typing import Any

from app.exceptions import DatastoreError, MarketplaceException, NotFoundError
from core.models.job import OPTIONAL_JOB_FIELDS, JobCreate, JobUpdate
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def _blank_optionals_to_null(data: dict[str, Any]) -> dict[str, Any]:
    """Store empty optional job fields as NULL."""
    for key in OPTIONAL_JOB_FIELDS:
        if key in data and not data[key]:
            data[key] = None
    return data


class JobService:
    """Service for job posting CRUD operations."""

    @staticmethod
    def list_jobs() -> list[dict[str, Any]]:
        """List all jobs, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("jobs")
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Error fetching jobs: {e}")
            raise DatastoreError("Failed to fetch jobs", str(e))

    @staticmethod
    def list_owner_jobs(owner_id: str) -> list[dict[str, Any]]:
        """List the jobs posted by one business owner, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("jobs")
                .select("*")
                .eq("business_owner_id", owner_id)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Error fetching jobs for {owner_id}: {e}")
            raise DatastoreError("Failed to fetch jobs", str(e))

    @staticmethod
    def get_job(job_id: str) -> dict[str, Any]:
        """
        Get a job by ID.

        Raises:
            NotFoundError: If the job doesn't exist
        """
        job = SupabaseClient.fetch_single("jobs", "id", job_id)

        if not job:
            raise NotFoundError("Job not found", code="JOB_NOT_FOUND", details={"job_id": job_id})

        return job

    @staticmethod
    def get_owned_job(owner_id: str, job_id: str) -> dict[str, Any]:
        """
        Get a job, verifying it was posted by owner_id.

        Raises:
            NotFoundError: If not found or owned by someone else
        """
        job = SupabaseClient.fetch_single("jobs", "id", job_id)

        if not job or job.get("business_owner_id") != owner_id:
            raise NotFoundError(
                "Job not found or unauthorized",
                code="JOB_NOT_FOUND",
                details={"job_id": job_id},
            )

        return job

    @staticmethod
    def create_job(owner_id: str, request: JobCreate) -> dict[str, Any]:
        """
        Post a new job.

        Returns:
            Created job row

        Raises:
            DatastoreError: If the insert fails
        """
        client = SupabaseClient.get_client()

        data = _blank_optionals_to_null({
            "business_owner_id": owner_id,
            **request.model_dump(),
        })

        try:
            response = client.table("jobs").insert(data).execute()

            if response.data:
                job = response.data[0]
                logger.info(f"Created job {job.get('id')} for {owner_id}")
                return job

            raise DatastoreError("Failed to create job", "Insert returned no data")

        except MarketplaceException:
            raise
        except Exception as e:
            logger.error(f"Error creating job: {e}")
            raise DatastoreError("Failed to create job", str(e))

    @staticmethod
    def update_job(owner_id: str, job_id: str, request: JobUpdate) -> dict[str, Any]:
        """
        Update fields of an owned job.

        Only fields present in the request are changed; optional fields
        sent as blank are cleared.

        Raises:
            NotFoundError: If not found or not owned
        """
        existing = JobService.get_owned_job(owner_id, job_id)

        changes = _blank_optionals_to_null(request.model_dump(exclude_unset=True))
        if not changes:
            return existing

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("jobs")
                .update(changes)
                .eq("id", job_id)
                .execute()
            )

            if response.data:
                logger.info(f"Updated job {job_id}")
                return response.data[0]

            return {**existing, **changes}

        except Exception as e:
            logger.error(f"Error updating job {job_id}: {e}")
            raise DatastoreError("Failed to update job", str(e))

    @staticmethod
    def delete_job(owner_id: str, job_id: str) -> None:
        """
        Delete an owned job.

        Raises:
            NotFoundError: If not found or not owned
        """
        JobService.get_owned_job(owner_id, job_id)

        client = SupabaseClient.get_client()

        try:
            client.table("jobs").delete().eq("id", job_id).execute()
            logger.info(f"Deleted job {job_id}")
        except Exception as e:
            logger.error(f"Error deleting job {job_id}: {e}")
            raise DatastoreError("Failed to delete job", str(e))

    @staticmethod
    def list_applicants(owner_id: str, job_id: str) -> list[dict[str, Any]]:
        """
        List the applications to an owned job with each applicant's profile.

        Returns:
            Application rows, newest first, each with a "creator" key holding
            the applicant's creator profile (None if it was deleted)

        Raises:
            NotFoundError: If not found or not owned
        """
        JobService.get_owned_job(owner_id, job_id)

        client = SupabaseClient.get_client()

        try:
            applications = (
                client.table("applications")
                .select("*")
                .eq("job_id", job_id)
                .order("applied_at", desc=True)
                .execute()
            ).data or []

            creator_ids = sorted({app["creator_id"] for app in applications})
            profiles = []
            if creator_ids:
                profiles = (
                    client.table("creator_profiles")
                    .select("*")
                    .in_("user_id", creator_ids)
                    .execute()
                ).data or []

        except Exception as e:
            logger.error(f"Error fetching applicants for job {job_id}: {e}")
            raise DatastoreError("Failed to fetch applicants", str(e))

        profiles_by_user = {profile["user_id"]: profile for profile in profiles}
        return [
            {**app, "creator": profiles_by_user.get(app["creator_id"])}
            for app in applications
        ]

# =============================================================================
# core/services/application_service.py - Applications and Saved Jobs
# =============================================================================
# A creator can apply to a job once and save (bookmark) a job once.
#
# Uniqueness is checked before inserting, and an insert that still hits the
# database's unique constraint (two concurrent requests) is reported with
# the same error.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    AlreadyAppliedError,
    AlreadySavedError,
    DatastoreError,
    MarketplaceException,
    MissingFieldsError,
)
from core.services.job_service import JobService
from lib.supabase_client import SupabaseClient, is_unique_violation

logger = logging.getLogger(__name__)


def _require_job_id(job_id: str | None) -> str:
    if not job_id:
        raise MissingFieldsError("Job ID is required", fields=["job_id"])
    return job_id


class ApplicationService:
    """Service for job applications."""

    @staticmethod
    def has_applied(creator_id: str, job_id: str) -> bool:
        """Check whether a creator has applied to a job."""
        existing = SupabaseClient.fetch_single(
            "applications", "job_id", job_id, columns="id", creator_id=creator_id
        )
        return existing is not None

    @staticmethod
    def apply(creator_id: str, job_id: str | None) -> dict[str, Any]:
        """
        Apply a creator to a job.

        Returns:
            Created application row

        Raises:
            MissingFieldsError: If job_id is missing
            NotFoundError: If the job doesn't exist
            AlreadyAppliedError: If the creator already applied
        """
        job_id = _require_job_id(job_id)
        JobService.get_job(job_id)

        if ApplicationService.has_applied(creator_id, job_id):
            raise AlreadyAppliedError(job_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("applications")
                .insert({"job_id": job_id, "creator_id": creator_id})
                .execute()
            )

            if response.data:
                application = response.data[0]
                logger.info(f"Creator {creator_id} applied to job {job_id}")
                return application

            raise DatastoreError("Failed to submit application", "Insert returned no data")

        except MarketplaceException:
            raise
        except Exception as e:
            if is_unique_violation(e):
                raise AlreadyAppliedError(job_id)
            logger.error(f"Error creating application: {e}")
            raise DatastoreError("Failed to submit application", str(e))

    @staticmethod
    def list_applications(creator_id: str) -> list[dict[str, Any]]:
        """
        List a creator's applications with the job embedded, newest first.
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("applications")
                .select("*, jobs (*)")
                .eq("creator_id", creator_id)
                .order("applied_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Error fetching applications for {creator_id}: {e}")
            raise DatastoreError("Failed to fetch applications", str(e))


class SavedJobService:
    """Service for saved (bookmarked) jobs."""

    @staticmethod
    def has_saved(creator_id: str, job_id: str) -> bool:
        """Check whether a creator has saved a job."""
        existing = SupabaseClient.fetch_single(
            "saved_jobs", "job_id", job_id, columns="id", creator_id=creator_id
        )
        return existing is not None

    @staticmethod
    def save(creator_id: str, job_id: str | None) -> dict[str, Any]:
        """
        Save a job for a creator.

        Raises:
            MissingFieldsError: If job_id is missing
            AlreadySavedError: If already saved
        """
        job_id = _require_job_id(job_id)

        if SavedJobService.has_saved(creator_id, job_id):
            raise AlreadySavedError(job_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("saved_jobs")
                .insert({"job_id": job_id, "creator_id": creator_id})
                .execute()
            )

            if response.data:
                logger.info(f"Creator {creator_id} saved job {job_id}")
                return response.data[0]

            raise DatastoreError("Failed to save job", "Insert returned no data")

        except MarketplaceException:
            raise
        except Exception as e:
            if is_unique_violation(e):
                raise AlreadySavedError(job_id)
            logger.error(f"Error saving job: {e}")
            raise DatastoreError("Failed to save job", str(e))

    @staticmethod
    def unsave(creator_id: str, job_id: str | None) -> None:
        """
        Remove a saved job. Removing a job that isn't saved is a no-op.

        Raises:
            MissingFieldsError: If job_id is missing
        """
        job_id = _require_job_id(job_id)
        client = SupabaseClient.get_client()

        try:
            (
                client.table("saved_jobs")
                .delete()
                .eq("job_id", job_id)
                .eq("creator_id", creator_id)
                .execute()
            )
            logger.info(f"Creator {creator_id} unsaved job {job_id}")
        except Exception as e:
            logger.error(f"Error unsaving job: {e}")
            raise DatastoreError("Failed to unsave job", str(e))

    @staticmethod
    def list_saved(creator_id: str) -> list[dict[str, Any]]:
        """List a creator's saved jobs with the job embedded, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("saved_jobs")
                .select("*, jobs (*)")
                .eq("creator_id", creator_id)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Error fetching saved jobs for {creator_id}: {e}")
            raise DatastoreError("Failed to fetch saved jobs", str(e))

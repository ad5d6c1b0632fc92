# =============================================================================
# core/models/job.py - Job Request Schemas
# =============================================================================
# Businesses post jobs; creators apply to them and bookmark them.
# =============================================================================

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    """
    Request body for POST /jobs.

    Example:
        {
            "title": "Promote our new rooftop bar",
            "description": "Two reels and three stories",
            "business_name": "Sky Lounge",
            "city": "Lisbon",
            "country": "Portugal",
            "industry": "Hospitality",
            "payment_range": "$500-$800"
        }
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    business_name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)

    job_date: str | None = Field(default=None, examples=["2024-07-01"])
    job_time: str | None = Field(default=None, examples=["18:00"])
    payment_range: str | None = None
    payment_notes: str | None = None


class JobUpdate(BaseModel):
    """Request body for PATCH /jobs/{id}. Only sent fields are updated."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    business_name: str | None = Field(default=None, min_length=1)
    city: str | None = Field(default=None, min_length=1)
    country: str | None = Field(default=None, min_length=1)
    industry: str | None = Field(default=None, min_length=1)
    job_date: str | None = None
    job_time: str | None = None
    payment_range: str | None = None
    payment_notes: str | None = None


# Optional job columns stored as NULL when blank
OPTIONAL_JOB_FIELDS = ("job_date", "job_time", "payment_range", "payment_notes")


class JobReference(BaseModel):
    """
    Request body carrying a job ID (applications, saved jobs).

    job_id is optional here so a missing value gets the API's own
    "Job ID is required" error instead of a generic validation error.
    """

    job_id: str | None = None

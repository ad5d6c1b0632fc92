# =============================================================================
# core/models/creator.py - Creator, Travel and Discovery Schemas
# =============================================================================
# These models define the creator side of the marketplace:
# - CreatorProfile: A row of creator_profiles
# - Travel: A row of creator_travels (a time-bounded destination)
# - TravelCreate / TravelUpdate: Request bodies for the travels endpoints
# - DiscoveryCriteria: Optional filters for GET /creators
# - DiscoveryResult: A creator decorated with travel-match information
#
# A travel makes its creator discoverable at the destination from 30 days
# before start_date through end_date (see lib/discovery.py).
# =============================================================================

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lib.utils import blank_to_none


class CreatorProfile(BaseModel):
    """
    Public profile of a content creator.

    Created once at onboarding and edited only by its owner.

    Example:
        {
            "user_id": "user_2abc",
            "username": "amy",
            "bio": "Food and travel vlogs",
            "city": "Paris",
            "country": "France",
            "instagram_url": "https://instagram.com/amy"
        }
    """

    id: str | None = None

    # Owning user (identity-provider user ID)
    user_id: str = Field(..., description="ID of the user owning this profile")

    username: str = Field(..., description="Unique public handle")

    bio: str | None = Field(default=None, description="Free-text description")

    # Home location - matched exactly by discovery filters
    city: str = Field(..., description="Home city")
    country: str = Field(..., description="Home country")

    # Social links
    instagram_url: str | None = None
    youtube_url: str | None = None
    tiktok_url: str | None = None
    other_url: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None


class Travel(BaseModel):
    """
    A destination a creator will be at between start_date and end_date.

    Dates are inclusive and end_date >= start_date is enforced on write.
    """

    id: str | None = None
    creator_id: str
    destination_city: str
    destination_country: str
    start_date: date
    end_date: date
    created_at: datetime | None = None


class TravelCreate(BaseModel):
    """Request body for POST /travels. All fields are required."""

    destination_city: str = Field(..., min_length=1, examples=["Lisbon"])
    destination_country: str = Field(..., min_length=1, examples=["Portugal"])
    start_date: date = Field(..., examples=["2024-06-01"])
    end_date: date = Field(..., examples=["2024-06-14"])


class TravelUpdate(BaseModel):
    """
    Request body for PATCH /travels/{id}.

    Only the fields that are sent are updated.
    """

    destination_city: str | None = Field(default=None, min_length=1)
    destination_country: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None


class DiscoveryCriteria(BaseModel):
    """
    Optional filters for creator discovery.

    Absent filters are None. Blank strings coming from query parameters
    are normalized to None so "no filter" has a single representation.
    """

    model_config = ConfigDict(frozen=True)

    search: str | None = None
    country: str | None = None
    city: str | None = None

    @field_validator("search", "country", "city", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: str | None) -> str | None:
        return blank_to_none(value)

    @property
    def has_location(self) -> bool:
        """True when a country and/or city filter is set."""
        return self.country is not None or self.city is not None


class DiscoveryResult(CreatorProfile):
    """
    A creator as returned by GET /creators.

    - travels: the travels shown for this creator. Without a location filter
      these are all of the creator's active travels; with one, only the
      travels that matched it (empty when the creator matched by home).
    - is_traveling: whether the creator has any active travel at all
    - matched_via_travel: whether a travel destination satisfied the filter
    """

    travels: list[Travel] = Field(default_factory=list)
    is_traveling: bool = False
    matched_via_travel: bool = False

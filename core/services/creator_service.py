# =============================================================================
# core/services/creator_service.py - Creator Discovery Data Access
# =============================================================================
# Fetches creator profiles and active travels from the database and hands
# them to lib.discovery for filtering and travel matching.
#
# The only filter pushed down to the database is the free-text search
# (ILIKE on username/bio) and the active-travel date range. Location
# matching happens in memory.
# =============================================================================

import logging
from datetime import date

from app.config import settings
from app.exceptions import DatastoreError, NotFoundError
from core.models.creator import CreatorProfile, DiscoveryCriteria, DiscoveryResult, Travel
from lib.discovery import active_window_bounds, discover
from lib.supabase_client import SupabaseClient
from lib.utils import utc_today

logger = logging.getLogger(__name__)


def _quote_filter_value(value: str) -> str:
    """
    Double-quote a value for a PostgREST or=(...) filter.

    Quoting keeps commas and parentheses in the value literal; backslashes
    and double quotes are backslash-escaped.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _search_filter(search: str) -> str:
    """Build the PostgREST or-filter for a username/bio substring search."""
    pattern = _quote_filter_value(f"%{search}%")
    return f"username.ilike.{pattern},bio.ilike.{pattern}"


class CreatorService:
    """Service for creator discovery and public creator profiles."""

    @staticmethod
    def fetch_creators(search: str | None = None) -> list[CreatorProfile]:
        """
        Fetch creator profiles, newest first.

        Args:
            search: Optional case-insensitive substring for username/bio

        Raises:
            DatastoreError: If the query fails
        """
        client = SupabaseClient.get_client()

        query = (
            client.table("creator_profiles")
            .select("*")
            .order("created_at", desc=True)
        )
        if search:
            query = query.or_(_search_filter(search))

        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Error fetching creators: {e}")
            raise DatastoreError("Failed to fetch creators", str(e))

        return [CreatorProfile.model_validate(row) for row in response.data or []]

    @staticmethod
    def fetch_active_travels(
        today: date,
        creator_id: str | None = None,
    ) -> list[Travel]:
        """
        Fetch travels whose visibility window contains today.

        Args:
            today: Reference date
            creator_id: Restrict to one creator (default: all creators)

        Raises:
            DatastoreError: If the query fails
        """
        client = SupabaseClient.get_client()
        latest_start, earliest_end = active_window_bounds(today, settings.TRAVEL_VISIBILITY_DAYS)

        query = (
            client.table("creator_travels")
            .select("*")
            .lte("start_date", latest_start.isoformat())
            .gte("end_date", earliest_end.isoformat())
        )
        if creator_id:
            query = query.eq("creator_id", creator_id)

        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Error fetching active travels: {e}")
            raise DatastoreError("Failed to fetch creators", str(e))

        return [Travel.model_validate(row) for row in response.data or []]

    @staticmethod
    def discover_creators(
        criteria: DiscoveryCriteria,
        today: date | None = None,
    ) -> list[DiscoveryResult]:
        """
        Run creator discovery.

        Returns:
            Matching creators, newest first, annotated with travel info
        """
        today = today or utc_today()

        creators = CreatorService.fetch_creators(criteria.search)
        travels = CreatorService.fetch_active_travels(today)

        results = discover(
            creators,
            travels,
            criteria,
            today=today,
            lead_days=settings.TRAVEL_VISIBILITY_DAYS,
        )

        logger.debug(
            f"Discovery {criteria.model_dump()} -> {len(results)} of {len(creators)} creators"
        )
        return results

    @staticmethod
    def list_countries() -> list[str]:
        """
        List the distinct home countries of all creators, sorted.

        Raises:
            DatastoreError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = client.table("creator_profiles").select("country").execute()
        except Exception as e:
            logger.error(f"Error fetching countries: {e}")
            raise DatastoreError("Failed to fetch countries", str(e))

        return sorted({row["country"] for row in response.data or [] if row.get("country")})

    @staticmethod
    def get_by_username(username: str, today: date | None = None) -> DiscoveryResult:
        """
        Get one creator's public profile with its active travels.

        Raises:
            NotFoundError: If no creator has this username
        """
        row = SupabaseClient.fetch_single("creator_profiles", "username", username)
        if not row:
            raise NotFoundError(
                "Creator not found",
                code="CREATOR_NOT_FOUND",
                details={"username": username},
            )

        today = today or utc_today()
        creator = CreatorProfile.model_validate(row)
        travels = CreatorService.fetch_active_travels(today, creator_id=creator.user_id)

        # No location criteria: the creator comes back with all active travels
        return discover(
            [creator],
            travels,
            today=today,
            lead_days=settings.TRAVEL_VISIBILITY_DAYS,
        )[0]

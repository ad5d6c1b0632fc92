# =============================================================================
# core/services/travel_service.py - Travel Business Logic
# =============================================================================
# Handles a creator's travel itinerary (creator_travels table).
#
# Write rules:
# - end_date may not be before start_date
# - Creating a travel first deletes the creator's expired travels
#   (end_date before today). There is no background cleanup job.
# =============================================================================

import logging
from datetime import date
from typing import Any

from app.exceptions import (
    DatastoreError,
    InvalidDateRangeError,
    MarketplaceException,
    NotFoundError,
)
from core.models.creator import TravelCreate, TravelUpdate
from lib.supabase_client import SupabaseClient
from lib.utils import parse_date, utc_today

logger = logging.getLogger(__name__)

TRAVELS_TABLE = "creator_travels"


class TravelService:
    """Service for creator travel CRUD operations."""

    @staticmethod
    def validate_date_range(start_date: date | str | None, end_date: date | str | None) -> None:
        """
        Check that a travel doesn't end before it starts.

        Only checked when both dates are known.

        Raises:
            InvalidDateRangeError: If end_date < start_date
        """
        start = parse_date(start_date)
        end = parse_date(end_date)

        if start is not None and end is not None and end < start:
            raise InvalidDateRangeError(start, end)

    @staticmethod
    def list_travels(creator_id: str) -> list[dict[str, Any]]:
        """
        List all of a creator's travels, past ones included.

        Returns:
            Travel rows ordered by start_date ascending
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TRAVELS_TABLE)
                .select("*")
                .eq("creator_id", creator_id)
                .order("start_date", desc=False)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list travels for {creator_id}: {e}")
            raise DatastoreError("Failed to fetch travels", str(e))

    @staticmethod
    def delete_expired(creator_id: str, today: date | None = None) -> list[dict[str, Any]]:
        """
        Delete a creator's travels whose end_date is before today.

        Returns:
            The deleted rows
        """
        client = SupabaseClient.get_client()
        today = today or utc_today()

        try:
            response = (
                client.table(TRAVELS_TABLE)
                .delete()
                .eq("creator_id", creator_id)
                .lt("end_date", today.isoformat())
                .execute()
            )
            deleted = response.data or []
            if deleted:
                logger.info(f"Deleted {len(deleted)} expired travels for {creator_id}")
            return deleted

        except Exception as e:
            logger.error(f"Failed to clean up expired travels for {creator_id}: {e}")
            raise DatastoreError("Failed to create travel", str(e))

    @staticmethod
    def create_travel(
        creator_id: str,
        request: TravelCreate,
        today: date | None = None,
    ) -> dict[str, Any]:
        """
        Create a travel for a creator.

        Validates the date range, removes the creator's expired travels,
        then inserts the new one.

        Returns:
            Created travel row

        Raises:
            InvalidDateRangeError: If end_date < start_date
            DatastoreError: If the cleanup or insert fails
        """
        TravelService.validate_date_range(request.start_date, request.end_date)

        TravelService.delete_expired(creator_id, today=today)

        client = SupabaseClient.get_client()
        data = {
            "creator_id": creator_id,
            "destination_city": request.destination_city,
            "destination_country": request.destination_country,
            "start_date": request.start_date.isoformat(),
            "end_date": request.end_date.isoformat(),
        }

        try:
            response = client.table(TRAVELS_TABLE).insert(data).execute()

            if response.data:
                travel = response.data[0]
                logger.info(f"Created travel {travel.get('id')} for creator {creator_id}")
                return travel

            raise DatastoreError("Failed to create travel", "Insert returned no data")

        except MarketplaceException:
            raise
        except Exception as e:
            logger.error(f"Error creating travel: {e}")
            raise DatastoreError("Failed to create travel", str(e))

    @staticmethod
    def get_owned_travel(creator_id: str, travel_id: str) -> dict[str, Any]:
        """
        Get a travel, verifying it belongs to the creator.

        Raises:
            NotFoundError: If it doesn't exist or belongs to someone else
        """
        travel = SupabaseClient.fetch_single(TRAVELS_TABLE, "id", travel_id)

        if not travel or travel.get("creator_id") != creator_id:
            raise NotFoundError(
                "Travel not found or unauthorized",
                code="TRAVEL_NOT_FOUND",
                details={"travel_id": travel_id},
            )

        return travel

    @staticmethod
    def update_travel(
        creator_id: str,
        travel_id: str,
        request: TravelUpdate,
    ) -> dict[str, Any]:
        """
        Update fields of a creator's travel.

        A date that isn't being changed is checked against the stored one,
        so an update can't leave the travel ending before it starts.

        Raises:
            NotFoundError: If not found or not owned
            InvalidDateRangeError: If the resulting end_date < start_date
        """
        existing = TravelService.get_owned_travel(creator_id, travel_id)

        changes = request.model_dump(exclude_none=True)
        TravelService.validate_date_range(
            changes.get("start_date", existing.get("start_date")),
            changes.get("end_date", existing.get("end_date")),
        )

        if not changes:
            return existing  # Nothing to update

        for key in ("start_date", "end_date"):
            if key in changes:
                changes[key] = changes[key].isoformat()

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TRAVELS_TABLE)
                .update(changes)
                .eq("id", travel_id)
                .execute()
            )

            if response.data:
                logger.info(f"Updated travel {travel_id}")
                return response.data[0]

            return {**existing, **changes}

        except Exception as e:
            logger.error(f"Error updating travel {travel_id}: {e}")
            raise DatastoreError("Failed to update travel", str(e))

    @staticmethod
    def delete_travel(creator_id: str, travel_id: str) -> None:
        """
        Delete a creator's travel.

        Raises:
            NotFoundError: If not found or not owned
        """
        TravelService.get_owned_travel(creator_id, travel_id)

        client = SupabaseClient.get_client()

        try:
            client.table(TRAVELS_TABLE).delete().eq("id", travel_id).execute()
            logger.info(f"Deleted travel {travel_id}")
        except Exception as e:
            logger.error(f"Error deleting travel {travel_id}: {e}")
            raise DatastoreError("Failed to delete travel", str(e))

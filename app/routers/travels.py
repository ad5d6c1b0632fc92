# =============================================================================
# app/routers/travels.py - Travel Itinerary Endpoints
# =============================================================================
# Creators manage the destinations they'll be visiting.
# All endpoints require authentication and a creator account.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUser
from core.models.creator import TravelCreate, TravelUpdate
from core.models.user import UserType
from core.services.travel_service import TravelService
from core.services.user_service import UserService

router = APIRouter()


@router.get("")
async def list_travels(user: CurrentUser):
    """
    List the creator's travels, past ones included, by start date.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "manage travels")
    return {"travels": TravelService.list_travels(user.id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_travel(request: TravelCreate, user: CurrentUser):
    """
    Add a travel.

    The end date can't be before the start date. Travels that already
    ended are removed from the creator's itinerary first.
    """
    UserService.require_user_type(user.id, UserType.CREATOR, "add travels")
    travel = TravelService.create_travel(user.id, request)

    return {"success": True, "travel": travel}


@router.patch("/{travel_id}")
async def update_travel(
    travel_id: Annotated[str, Path(description="Travel ID")],
    request: TravelUpdate,
    user: CurrentUser,
):
    """
    Update a travel. Only the owner can update it.
    """
    travel = TravelService.update_travel(user.id, travel_id, request)
    return {"success": True, "travel": travel}


@router.delete("/{travel_id}")
async def delete_travel(
    travel_id: Annotated[str, Path(description="Travel ID")],
    user: CurrentUser,
):
    """
    Delete a travel. Only the owner can delete it.
    """
    TravelService.delete_travel(user.id, travel_id)
    return {"success": True}

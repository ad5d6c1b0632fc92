# =============================================================================
# app/routers/creators.py - Creator Discovery Endpoints
# =============================================================================
# Public endpoints for browsing creators:
# - GET /creators: search + location filter with travel matching
# - GET /creators/countries: home countries for the filter dropdown
# - GET /creators/{username}: one creator's public profile
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from core.models.creator import DiscoveryCriteria
from core.services.creator_service import CreatorService

router = APIRouter()


@router.get("")
async def list_creators(
    search: Annotated[str | None, Query(description="Substring of username or bio")] = None,
    country: Annotated[str | None, Query(description="Home or travel destination country")] = None,
    city: Annotated[str | None, Query(description="Home or travel destination city")] = None,
):
    """
    Discover creators.

    Without filters, returns every creator (newest first) with their
    active travels. With country and/or city, returns creators who live
    there or have an active travel there; travel matches are flagged with
    matched_via_travel and show only the matching travels.
    """
    criteria = DiscoveryCriteria(search=search, country=country, city=city)
    creators = CreatorService.discover_creators(criteria)

    return {"creators": [creator.model_dump(mode="json") for creator in creators]}


@router.get("/countries")
async def list_countries():
    """List the distinct home countries of all creators, sorted."""
    return {"countries": CreatorService.list_countries()}


@router.get("/{username}")
async def get_creator(
    username: Annotated[str, Path(description="Creator username")],
):
    """
    Get a creator's public profile with their active travels.
    """
    creator = CreatorService.get_by_username(username)
    return {"creator": creator.model_dump(mode="json")}

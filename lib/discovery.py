# =============================================================================
# lib/discovery.py - Creator Discovery and Travel Matching
# =============================================================================
# Pure functions (no I/O) that turn a creator roster plus a travel roster
# into the creator list shown to businesses:
#
#   1. Keep creators whose username or bio contains the search text
#   2. Attach each creator's *active* travels
#   3. With a country/city filter, keep creators who live there OR have an
#      active travel there, and show only the travels that matched
#
# A travel is active while today falls inside its visibility window
# [start_date - 30 days, end_date], both ends inclusive. Activity is always
# computed from `today`; nothing is cached on the Travel rows.
#
# Usage:
#   from lib.discovery import discover
#   results = discover(creators, travels, DiscoveryCriteria(country="France"))
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from core.models.creator import (
    CreatorProfile,
    DiscoveryCriteria,
    DiscoveryResult,
    Travel,
)
from lib.utils import utc_today

# How long before start_date a travel starts showing up in discovery
VISIBILITY_LEAD_DAYS = 30


# =============================================================================
# Travel Windows
# =============================================================================

def visibility_window(travel: Travel, lead_days: int = VISIBILITY_LEAD_DAYS) -> tuple[date, date]:
    """Return the inclusive (first_visible_day, last_visible_day) of a travel."""
    return travel.start_date - timedelta(days=lead_days), travel.end_date


def is_active_travel(
    travel: Travel,
    today: date,
    lead_days: int = VISIBILITY_LEAD_DAYS,
) -> bool:
    """
    Check whether a travel is active for discovery on `today`.

    Equivalent to start_date <= today + lead_days AND end_date >= today.

    Example:
        trip = Travel(creator_id="u1", destination_city="Rome",
                      destination_country="Italy",
                      start_date=date(2024, 7, 1), end_date=date(2024, 7, 10))
        is_active_travel(trip, date(2024, 6, 1))   # True  (window opens)
        is_active_travel(trip, date(2024, 5, 31))  # False
        is_active_travel(trip, date(2024, 7, 10))  # True  (last day)
    """
    first_day, last_day = visibility_window(travel, lead_days)
    return first_day <= today <= last_day


def active_window_bounds(
    today: date,
    lead_days: int = VISIBILITY_LEAD_DAYS,
) -> tuple[date, date]:
    """
    Bounds for fetching active travels from the database.

    Returns:
        (latest_start, earliest_end): a travel is active iff
        start_date <= latest_start and end_date >= earliest_end
    """
    return today + timedelta(days=lead_days), today


def group_active_travels(
    travels: Iterable[Travel],
    today: date,
    lead_days: int = VISIBILITY_LEAD_DAYS,
) -> dict[str, list[Travel]]:
    """Group the travels active on `today` by creator_id, keeping input order."""
    grouped: dict[str, list[Travel]] = {}
    for travel in travels:
        if is_active_travel(travel, today, lead_days):
            grouped.setdefault(travel.creator_id, []).append(travel)
    return grouped


# =============================================================================
# Matching
# =============================================================================

def matches_search(creator: CreatorProfile, search: str | None) -> bool:
    """Case-insensitive substring match on username or bio."""
    if not search:
        return True
    needle = search.lower()
    return needle in creator.username.lower() or needle in (creator.bio or "").lower()


def matches_location(city: str, country: str, criteria: DiscoveryCriteria) -> bool:
    """Exact, case-sensitive match against whichever of country/city is set."""
    if criteria.country is not None and country != criteria.country:
        return False
    if criteria.city is not None and city != criteria.city:
        return False
    return True


@dataclass
class Classification:
    """
    Why (and whether) a creator appears in discovery results.

    visible_travels are the travels to display for this creator.
    """
    included: bool
    matched_via_travel: bool = False
    visible_travels: list[Travel] = field(default_factory=list)


def classify(
    creator: CreatorProfile,
    active_travels: list[Travel],
    criteria: DiscoveryCriteria,
) -> Classification:
    """
    Decide whether a creator matches the location criteria.

    Without a location filter every creator is included with all of its
    active travels. With one, a matching travel wins over a home match:
    the creator is flagged matched_via_travel and only the matching travels
    are shown. A home-only match shows no travels at all.
    """
    if not criteria.has_location:
        return Classification(included=True, visible_travels=list(active_travels))

    matches_home = matches_location(creator.city, creator.country, criteria)
    matching_travels = [
        travel for travel in active_travels
        if matches_location(travel.destination_city, travel.destination_country, criteria)
    ]

    if matching_travels:
        return Classification(
            included=True,
            matched_via_travel=True,
            visible_travels=matching_travels,
        )

    return Classification(included=matches_home)


def project(
    creator: CreatorProfile,
    active_travels: list[Travel],
    classification: Classification,
) -> DiscoveryResult:
    """Build the DiscoveryResult payload for a classified creator."""
    return DiscoveryResult(
        **creator.model_dump(),
        travels=classification.visible_travels,
        is_traveling=len(active_travels) > 0,
        matched_via_travel=classification.matched_via_travel,
    )


# =============================================================================
# Entry Point
# =============================================================================

def discover(
    creators: Iterable[CreatorProfile],
    travels: Iterable[Travel],
    criteria: DiscoveryCriteria | None = None,
    today: date | None = None,
    lead_days: int = VISIBILITY_LEAD_DAYS,
) -> list[DiscoveryResult]:
    """
    Filter and annotate creators for discovery.

    Args:
        creators: Creator roster, already ordered (newest first)
        travels: Travel roster; inactive travels are ignored
        criteria: Optional search / country / city filters
        today: Reference date (default: today in UTC)
        lead_days: Days before start_date a travel becomes visible

    Returns:
        DiscoveryResult list in roster order
    """
    criteria = criteria or DiscoveryCriteria()
    today = today or utc_today()

    travels_by_creator = group_active_travels(travels, today, lead_days)

    results: list[DiscoveryResult] = []
    for creator in creators:
        if not matches_search(creator, criteria.search):
            continue

        active = travels_by_creator.get(creator.user_id, [])
        classification = classify(creator, active, criteria)
        if classification.included:
            results.append(project(creator, active, classification))

    return results

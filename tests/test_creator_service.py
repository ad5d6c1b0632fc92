# =============================================================================
# tests/test_creator_service.py - Tests for CreatorService
# =============================================================================

import re

import pytest

from app.exceptions import DatastoreError, NotFoundError
from core.models.creator import DiscoveryCriteria
from core.services.creator_service import CreatorService, _search_filter
from tests.conftest import TODAY, creator_row, travel_row


@pytest.fixture
def creators():
    return [
        creator_row("u1", "amy", "Paris", "France", bio="Food vlogs"),
        creator_row("u2", "ben", "London", "UK"),
        creator_row("u3", "cara", "Berlin", "Germany"),
    ]


class TestSearchFilter:
    """Tests for the PostgREST search filter."""

    def test_matches_username_or_bio(self):
        assert _search_filter("amy") == 'username.ilike."%amy%",bio.ilike."%amy%"'

    def test_keeps_punctuation_literal(self):
        """Commas and parentheses stay in the quoted value."""
        assert _search_filter("coffee, tea (hot)") == (
            'username.ilike."%coffee, tea (hot)%",bio.ilike."%coffee, tea (hot)%"'
        )

    def test_escapes_quotes_and_backslashes(self):
        assert _search_filter('say "hi" \\ bye') == (
            'username.ilike."%say \\"hi\\" \\\\ bye%",'
            'bio.ilike."%say \\"hi\\" \\\\ bye%"'
        )

    def test_pushed_pattern_matches_stored_bio(self):
        """The bio pattern, once unquoted, is a substring of the stored bio."""
        pushed = _search_filter("coffee, tea")
        quoted = re.search(r'bio\.ilike\."((?:[^"\\]|\\.)*)"', pushed).group(1)
        pattern = re.sub(r"\\(.)", r"\1", quoted).strip("%")

        assert pattern.lower() in "Coffee, tea and travel".lower()


class TestDiscoverCreators:
    """Tests for CreatorService.discover_creators."""

    def test_queries_newest_first_and_active_window(self, fake_supabase, creators):
        profiles = fake_supabase.on("creator_profiles", data=creators)
        travels = fake_supabase.on("creator_travels", data=[])

        results = CreatorService.discover_creators(DiscoveryCriteria(), today=TODAY)

        assert [r.username for r in results] == ["amy", "ben", "cara"]
        assert profiles.calls[1] == ("order", ("created_at",), {"desc": True})
        assert profiles.called("or_") == []
        assert travels.called("lte") == [("start_date", "2024-07-15")]
        assert travels.called("gte") == [("end_date", "2024-06-15")]

    def test_search_is_pushed_to_database(self, fake_supabase, creators):
        profiles = fake_supabase.on("creator_profiles", data=creators[:1])
        fake_supabase.on("creator_travels", data=[])

        results = CreatorService.discover_creators(DiscoveryCriteria(search="vlog"), today=TODAY)

        assert [r.username for r in results] == ["amy"]
        assert profiles.called("or_") == [('username.ilike."%vlog%",bio.ilike."%vlog%"',)]

    def test_search_with_comma_finds_bio(self, fake_supabase):
        profiles = fake_supabase.on("creator_profiles", data=[
            creator_row("u1", "amy", "Paris", "France", bio="Coffee, tea and travel"),
        ])
        fake_supabase.on("creator_travels", data=[])

        results = CreatorService.discover_creators(DiscoveryCriteria(search="coffee, tea"), today=TODAY)

        assert [r.username for r in results] == ["amy"]
        assert profiles.called("or_") == [
            ('username.ilike."%coffee, tea%",bio.ilike."%coffee, tea%"',)
        ]

    def test_country_filter_matches_home_or_travel(self, fake_supabase, creators):
        fake_supabase.on("creator_profiles", data=creators)
        fake_supabase.on("creator_travels", data=[
            travel_row("t1", "u3", "Lyon", "France", "2024-06-20", "2024-06-25"),
            travel_row("t2", "u3", "Rome", "Italy", "2024-06-10", "2024-06-30"),
        ])

        results = CreatorService.discover_creators(DiscoveryCriteria(country="France"), today=TODAY)

        assert [r.username for r in results] == ["amy", "cara"]
        cara = results[1]
        assert cara.matched_via_travel is True
        assert cara.is_traveling is True
        assert [t.id for t in cara.travels] == ["t1"]

    def test_datastore_failure(self, fake_supabase):
        fake_supabase.on("creator_profiles", error=Exception("timeout"))

        with pytest.raises(DatastoreError) as exc_info:
            CreatorService.discover_creators(DiscoveryCriteria(), today=TODAY)

        assert exc_info.value.message == "Failed to fetch creators"
        assert exc_info.value.status_code == 500


class TestCreatorLookups:
    """Tests for countries and single-creator lookups."""

    def test_list_countries_sorted_and_distinct(self, fake_supabase):
        fake_supabase.on("creator_profiles", data=[
            {"country": "UK"}, {"country": "France"}, {"country": "UK"}, {"country": None},
        ])

        assert CreatorService.list_countries() == ["France", "UK"]

    def test_get_by_username_includes_active_travels(self, fake_supabase, creators):
        fake_supabase.on("creator_profiles", data=creators[1])
        travels = fake_supabase.on("creator_travels", data=[
            travel_row("t1", "u2", "Rome", "Italy", "2024-07-01", "2024-07-04"),
        ])

        creator = CreatorService.get_by_username("ben", today=TODAY)

        assert creator.username == "ben"
        assert creator.is_traveling is True
        assert [t.id for t in creator.travels] == ["t1"]
        assert travels.called("eq") == [("creator_id", "u2")]

    def test_get_by_username_not_found(self, fake_supabase):
        fake_supabase.on("creator_profiles", data=None)

        with pytest.raises(NotFoundError) as exc_info:
            CreatorService.get_by_username("nobody", today=TODAY)

        assert exc_info.value.message == "Creator not found"

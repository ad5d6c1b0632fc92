# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeSupabase: a chainable stand-in for the supabase-py query builder
# - Row fixtures for creators, travels, users and jobs
# =============================================================================

import os
from collections import defaultdict
from datetime import date
from types import SimpleNamespace
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("CLERK_SECRET_KEY", "sk_test_key")
os.environ.setdefault("CLERK_JWKS_URL", "https://clerk.test/.well-known/jwks.json")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from lib.supabase_client import SupabaseClient


# Fixed reference date for every date-dependent test
TODAY = date(2024, 6, 15)


# =============================================================================
# Supabase Stub
# =============================================================================

class QueryStub:
    """
    Chainable stand-in for a supabase-py query builder.

    Every builder call (select, eq, or_, lte, insert, delete, ...) is
    recorded and returns the stub itself; execute() returns `data` or
    raises `error`. A .single() query with data=None raises PostgREST's
    "no rows" error, like the real client.
    """

    def __init__(self, table: str, data: Any = None, error: Exception | None = None):
        self.table = table
        self.data = data
        self.error = error
        self.calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        def builder(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return builder

    def called(self, name: str) -> list[tuple]:
        """Arguments of every call to a builder method."""
        return [args for call_name, args, _ in self.calls if call_name == name]

    def execute(self):
        if self.error is not None:
            raise self.error
        if self.data is None and self.called("single"):
            raise Exception("{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}")
        return SimpleNamespace(data=self.data, count=None)


class FakeSupabase:
    """
    Stand-in for the Supabase client.

    Register responses per table with on(); they are handed out in order,
    and the last one keeps being reused.
    """

    def __init__(self):
        self._queued: dict[str, list[QueryStub]] = defaultdict(list)
        self.used: list[QueryStub] = []

    def on(self, table: str, data: Any = None, error: Exception | None = None) -> QueryStub:
        stub = QueryStub(table, data, error)
        self._queued[table].append(stub)
        return stub

    def table(self, name: str) -> QueryStub:
        queued = self._queued[name]
        if len(queued) > 1:
            stub = queued.pop(0)
        elif queued:
            stub = queued[0]
        else:
            stub = QueryStub(name)
        self.used.append(stub)
        return stub

    def queries_for(self, table: str) -> list[QueryStub]:
        return [stub for stub in self.used if stub.table == table]


@pytest.fixture
def fake_supabase(monkeypatch):
    """Install a FakeSupabase as the singleton client."""
    fake = FakeSupabase()
    monkeypatch.setattr(SupabaseClient, "_instance", fake)
    return fake


# =============================================================================
# Row Fixtures
# =============================================================================

def creator_row(user_id: str, username: str, city: str, country: str, **extra) -> dict:
    """Build a creator_profiles row."""
    return {
        "id": f"profile-{user_id}",
        "user_id": user_id,
        "username": username,
        "bio": extra.pop("bio", None),
        "city": city,
        "country": country,
        "instagram_url": None,
        "youtube_url": None,
        "tiktok_url": None,
        "other_url": None,
        "created_at": extra.pop("created_at", "2024-01-15T10:00:00+00:00"),
        **extra,
    }


def travel_row(travel_id: str, creator_id: str, city: str, country: str, start: str, end: str) -> dict:
    """Build a creator_travels row."""
    return {
        "id": travel_id,
        "creator_id": creator_id,
        "destination_city": city,
        "destination_country": country,
        "start_date": start,
        "end_date": end,
        "created_at": "2024-05-01T09:00:00+00:00",
    }


@pytest.fixture
def creator_user_row():
    """A users row for an onboarded creator."""
    return {
        "id": "user_creator",
        "email": "amy@example.com",
        "first_name": "Amy",
        "last_name": None,
        "user_type": "creator",
        "onboarding_complete": True,
    }


@pytest.fixture
def business_user_row():
    """A users row for an onboarded business owner."""
    return {
        "id": "user_business",
        "email": "owner@skylounge.example",
        "first_name": "Sam",
        "last_name": "Lee",
        "user_type": "business",
        "onboarding_complete": True,
    }


@pytest.fixture
def job_row():
    """A jobs row posted by user_business."""
    return {
        "id": "job-1",
        "business_owner_id": "user_business",
        "title": "Promote our rooftop bar",
        "description": "Two reels and three stories",
        "business_name": "Sky Lounge",
        "city": "Lisbon",
        "country": "Portugal",
        "industry": "Hospitality",
        "job_date": None,
        "job_time": None,
        "payment_range": "$500-$800",
        "payment_notes": None,
        "created_at": "2024-06-01T12:00:00+00:00",
    }

# =============================================================================
# tests/test_api.py - HTTP-level tests for the API
# =============================================================================
# Drives the FastAPI app with TestClient. Authentication is replaced with
# dependency_overrides; the database with the FakeSupabase fixture.
# =============================================================================

import json
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from svix.webhooks import Webhook

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.config import settings
from app.main import app
from tests.conftest import creator_row, travel_row

WEBHOOK_SECRET = "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw"


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def sign_in_as(user_id: str) -> None:
    app.dependency_overrides[get_current_user] = lambda: AuthUser(id=user_id)


# =============================================================================
# Creators
# =============================================================================

class TestCreatorsEndpoint:
    """Tests for GET /api/v1/creators."""

    def test_lists_creators_with_travel_flags(self, client, fake_supabase):
        fake_supabase.on("creator_profiles", data=[
            creator_row("u1", "amy", "Paris", "France"),
            creator_row("u2", "ben", "London", "UK"),
        ])
        fake_supabase.on("creator_travels", data=[
            travel_row("t1", "u2", "Paris", "France", "2099-01-01", "2099-01-05"),
        ])

        with patch("core.services.creator_service.utc_today", return_value=date(2098, 12, 15)):
            response = client.get("/api/v1/creators", params={"country": "France"})

        assert response.status_code == 200
        creators = response.json()["creators"]
        assert [c["username"] for c in creators] == ["amy", "ben"]
        assert creators[0]["matched_via_travel"] is False
        assert creators[1]["matched_via_travel"] is True
        assert creators[1]["travels"][0]["start_date"] == "2099-01-01"

    def test_blank_filters_are_ignored(self, client, fake_supabase):
        profiles = fake_supabase.on("creator_profiles", data=[creator_row("u1", "amy", "Paris", "France")])
        fake_supabase.on("creator_travels", data=[])

        response = client.get("/api/v1/creators?search=&country=&city=")

        assert response.status_code == 200
        assert len(response.json()["creators"]) == 1
        assert profiles.called("or_") == []

    def test_datastore_failure_returns_500(self, client, fake_supabase):
        fake_supabase.on("creator_profiles", error=Exception("connection refused"))

        response = client.get("/api/v1/creators")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch creators"

    def test_unknown_username_is_404(self, client, fake_supabase):
        fake_supabase.on("creator_profiles", data=None)

        response = client.get("/api/v1/creators/nobody")

        assert response.status_code == 404
        assert response.json()["error"] == "Creator not found"


# =============================================================================
# Travels
# =============================================================================

class TestTravelsEndpoint:
    """Tests for /api/v1/travels."""

    body = {
        "destination_city": "Lisbon",
        "destination_country": "Portugal",
        "start_date": "2099-07-01",
        "end_date": "2099-07-10",
    }

    def test_requires_authentication(self, client):
        response = client.post("/api/v1/travels", json=self.body)

        assert response.status_code == 401

    def test_businesses_cannot_add_travels(self, client, fake_supabase, business_user_row):
        sign_in_as("user_business")
        fake_supabase.on("users", data=business_user_row)

        response = client.post("/api/v1/travels", json=self.body)

        assert response.status_code == 403
        assert response.json()["error"] == "Only creators can add travels"

    def test_end_before_start_is_400(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)

        response = client.post("/api/v1/travels", json={**self.body, "end_date": "2099-06-01"})

        assert response.status_code == 400
        assert response.json()["error"] == "End date must be after start date"
        assert fake_supabase.queries_for("creator_travels") == []

    def test_missing_fields_is_400(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)

        response = client.post("/api/v1/travels", json={"destination_city": "Lisbon"})

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "Missing required fields"
        assert "destination_country" in payload["details"]["fields"]

    def test_create_travel(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)
        fake_supabase.on("creator_travels", data=[])
        fake_supabase.on("creator_travels", data=[{"id": "t1", "creator_id": "user_creator", **self.body}])

        response = client.post("/api/v1/travels", json=self.body)

        assert response.status_code == 201
        assert response.json() == {
            "success": True,
            "travel": {"id": "t1", "creator_id": "user_creator", **self.body},
        }


# =============================================================================
# Jobs / Applications
# =============================================================================

class TestJobsEndpoints:
    """Tests for /api/v1/jobs and /api/v1/applications."""

    def test_job_detail_without_auth(self, client, fake_supabase, job_row):
        fake_supabase.on("jobs", data=job_row)

        response = client.get("/api/v1/jobs/job-1")

        assert response.status_code == 200
        assert response.json() == {"job": job_row}

    def test_job_detail_flags_for_signed_in_creator(self, client, fake_supabase, job_row, creator_user_row):
        app.dependency_overrides[get_current_user_optional] = lambda: AuthUser(id="user_creator")
        fake_supabase.on("users", data=creator_user_row)
        fake_supabase.on("jobs", data=job_row)
        fake_supabase.on("applications", data={"id": "a1"})
        fake_supabase.on("saved_jobs", data=None)

        response = client.get("/api/v1/jobs/job-1")

        assert response.json()["has_applied"] is True
        assert response.json()["has_saved"] is False

    def test_job_detail_has_no_flags_for_business(self, client, fake_supabase, job_row, business_user_row):
        app.dependency_overrides[get_current_user_optional] = lambda: AuthUser(id="user_business")
        fake_supabase.on("users", data=business_user_row)
        fake_supabase.on("jobs", data=job_row)

        response = client.get("/api/v1/jobs/job-1")

        assert response.json() == {"job": job_row}
        assert fake_supabase.queries_for("applications") == []
        assert fake_supabase.queries_for("saved_jobs") == []

    def test_apply_without_job_id(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)

        response = client.post("/api/v1/applications", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Job ID is required"

    def test_duplicate_application(self, client, fake_supabase, creator_user_row, job_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)
        fake_supabase.on("jobs", data=job_row)
        fake_supabase.on("applications", data={"id": "a1"})

        response = client.post("/api/v1/applications", json={"job_id": "job-1"})

        assert response.status_code == 400
        assert response.json()["error"] == "You have already applied to this job"

    def test_creators_cannot_post_jobs(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)

        response = client.post("/api/v1/jobs", json={
            "title": "Shoot",
            "description": "Reel",
            "business_name": "Cafe",
            "city": "Lyon",
            "country": "France",
            "industry": "Food",
        })

        assert response.status_code == 403
        assert response.json()["error"] == "Only business owners can post jobs"


# =============================================================================
# Dashboard
# =============================================================================

class TestDashboard:
    """Tests for GET /api/v1/dashboard."""

    def test_requires_onboarding(self, client, fake_supabase):
        sign_in_as("user_new")
        fake_supabase.on("users", data={"id": "user_new", "onboarding_complete": False})

        response = client.get("/api/v1/dashboard")

        assert response.status_code == 403
        assert response.json()["error"] == "Complete onboarding first"

    def test_business_gets_jobs(self, client, fake_supabase, business_user_row, job_row):
        sign_in_as("user_business")
        fake_supabase.on("users", data=business_user_row)
        jobs = fake_supabase.on("jobs", data=[job_row])

        response = client.get("/api/v1/dashboard")

        assert response.json() == {"user_type": "business", "jobs": [job_row]}
        assert jobs.called("eq") == [("business_owner_id", "user_business")]


# =============================================================================
# Webhooks
# =============================================================================

class TestClerkWebhook:
    """Tests for POST /api/v1/webhooks/clerk."""

    @pytest.fixture(autouse=True)
    def webhook_secret(self, monkeypatch):
        monkeypatch.setattr(settings, "CLERK_WEBHOOK_SECRET", WEBHOOK_SECRET)

    def signed_headers(self, payload: str) -> dict[str, str]:
        timestamp = datetime.now(timezone.utc)
        signature = Webhook(WEBHOOK_SECRET).sign("msg_1", timestamp, payload)
        return {
            "svix-id": "msg_1",
            "svix-timestamp": str(int(timestamp.timestamp())),
            "svix-signature": signature,
            "content-type": "application/json",
        }

    def test_missing_headers(self, client):
        response = client.post("/api/v1/webhooks/clerk", content=b"{}")

        assert response.status_code == 400
        assert response.json()["error"] == "Missing svix headers"

    def test_bad_signature(self, client):
        payload = json.dumps({"type": "user.created", "data": {"id": "user_1"}})
        headers = self.signed_headers(payload)
        headers["svix-signature"] = "v1,bm90IGEgc2lnbmF0dXJl"

        response = client.post("/api/v1/webhooks/clerk", content=payload, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Webhook verification failed"

    def test_missing_secret_is_500(self, client, monkeypatch):
        monkeypatch.setattr(settings, "CLERK_WEBHOOK_SECRET", "")

        response = client.post("/api/v1/webhooks/clerk", content=b"{}")

        assert response.status_code == 500

    def test_user_created_inserts_row(self, client, fake_supabase):
        users = fake_supabase.on("users", data=[])
        payload = json.dumps({
            "type": "user.created",
            "data": {
                "id": "user_1",
                "first_name": "Amy",
                "email_addresses": [{"email_address": "amy@example.com"}],
            },
        })

        response = client.post(
            "/api/v1/webhooks/clerk", content=payload, headers=self.signed_headers(payload)
        )

        assert response.status_code == 200
        assert response.text == "Webhook processed"
        inserted = users.called("insert")[0][0]
        assert inserted["id"] == "user_1"
        assert inserted["email"] == "amy@example.com"

    def test_user_created_failure_is_500(self, client, fake_supabase):
        fake_supabase.on("users", error=Exception("insert failed"))
        payload = json.dumps({"type": "user.created", "data": {"id": "user_1"}})

        response = client.post(
            "/api/v1/webhooks/clerk", content=payload, headers=self.signed_headers(payload)
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Error creating user"

    def test_user_deleted(self, client, fake_supabase):
        users = fake_supabase.on("users", data=[])
        payload = json.dumps({"type": "user.deleted", "data": {"id": "user_1"}})

        response = client.post(
            "/api/v1/webhooks/clerk", content=payload, headers=self.signed_headers(payload)
        )

        assert response.status_code == 200
        assert users.called("delete") == [()]
        assert users.called("eq") == [("id", "user_1")]

    @pytest.mark.parametrize("verify_result", [None, {"type": "ignored"}])
    def test_event_is_read_from_body(self, client, fake_supabase, verify_result):
        """The event comes from the request body whatever verify() returns."""
        users = fake_supabase.on("users", data=[])
        payload = json.dumps({"type": "user.deleted", "data": {"id": "user_2"}})

        with patch.object(Webhook, "verify", return_value=verify_result):
            response = client.post(
                "/api/v1/webhooks/clerk", content=payload, headers=self.signed_headers(payload)
            )

        assert response.status_code == 200
        assert response.text == "Webhook processed"
        assert users.called("eq") == [("id", "user_2")]


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_reports_database(self, client, fake_supabase):
        fake_supabase.on("creator_profiles", error=Exception("down"))

        response = client.get("/api/v1/health/ready")

        assert response.json()["status"] == "degraded"


# =============================================================================
# Auth
# =============================================================================

class TestMe:
    """Tests for GET /api/v1/auth/me."""

    def test_returns_users_row(self, client, fake_supabase, creator_user_row):
        sign_in_as("user_creator")
        fake_supabase.on("users", data=creator_user_row)

        response = client.get("/api/v1/auth/me")

        assert response.status_code == 200
        assert response.json()["user_type"] == "creator"

    def test_falls_back_before_webhook_lands(self, client, fake_supabase):
        sign_in_as("user_new")
        fake_supabase.on("users", data=None)

        response = client.get("/api/v1/auth/me")

        assert response.json()["id"] == "user_new"
        assert response.json()["onboarding_complete"] is False

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Creator Marketplace API:
# - test_discovery.py: Discovery filter and travel window rules
# - test_models.py: Pydantic model validation
# - test_*_service.py, test_services.py: Service logic against a fake Supabase client
# - test_auth.py: Session token verification
# - test_api.py: Endpoint tests through FastAPI's TestClient
#
# Run tests with: poetry run pytest
# =============================================================================

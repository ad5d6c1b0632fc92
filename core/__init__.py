# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the marketplace's business logic:
# - models/: Pydantic schemas for rows and request bodies
# - services/: Datastore access and business rules, one service per resource
#
# Routers stay thin and delegate everything here.
# =============================================================================

# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Creator Marketplace API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    MarketplaceException,
    http_exception_handler,
    marketplace_exception_handler,
    validation_exception_handler,
)
from app.routers import health, creators, travels, jobs, applications, profile, webhooks
from app.auth import routes as auth_routes
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs startup/shutdown. There are no background tasks to manage;
    every request is served synchronously against the database.
    """
    logger.info(f"Starting Creator Marketplace API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Creator Marketplace API")


# Create FastAPI application
app = FastAPI(
    title="Creator Marketplace API",
    description="""
## Connecting content creators with local businesses

Creators build a profile and a travel itinerary, then browse, save and apply
to jobs. Businesses post jobs, review applicants, and discover creators who
live in, or are about to visit, their city.

### Creator discovery

`GET /api/v1/creators?search=&country=&city=` returns creators who match by
home location **or** by an active travel. A travel is active from 30 days
before it starts until its last day. Travel matches are flagged with
`matched_via_travel` and show only the matching travels.

### Authentication

Send the Clerk session token as `Authorization: Bearer <token>`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Token verification and the current user"},
        {"name": "Creators", "description": "Creator discovery and public profiles"},
        {"name": "Travels", "description": "Creator travel itineraries"},
        {"name": "Jobs", "description": "Job postings and applicant review"},
        {"name": "Applications", "description": "Applying to jobs"},
        {"name": "Saved Jobs", "description": "Bookmarking jobs"},
        {"name": "Account", "description": "Onboarding, profile and dashboard"},
        {"name": "Webhooks", "description": "Identity-provider user events"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(MarketplaceException, marketplace_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)


@app.exception_handler(ApplicationError)
async def handle_backend_error(request: Request, exc: ApplicationError):
    """Handle Supabase / Clerk client errors that reached a route."""
    logger.error(f"Backend error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": exc.code},
    )


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(auth_routes.router, prefix="/api/v1/auth", tags=["Auth"])

# Health check endpoints
app.include_router(health.router, prefix="/api/v1", tags=["Health"])

# Creator discovery
app.include_router(creators.router, prefix="/api/v1/creators", tags=["Creators"])

# Travel itineraries
app.include_router(travels.router, prefix="/api/v1/travels", tags=["Travels"])

# Job postings
app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["Jobs"])

# Applications and saved jobs
app.include_router(
    applications.applications_router,
    prefix="/api/v1/applications",
    tags=["Applications"]
)
app.include_router(
    applications.saved_jobs_router,
    prefix="/api/v1/saved-jobs",
    tags=["Saved Jobs"]
)

# Onboarding, profile, dashboard
app.include_router(profile.router, prefix="/api/v1", tags=["Account"])

# Identity-provider webhooks
app.include_router(webhooks.router, prefix="/api/v1/webhooks", tags=["Webhooks"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Creator Marketplace API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }

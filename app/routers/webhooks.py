# =============================================================================
# app/routers/webhooks.py - Identity Provider Webhooks
# =============================================================================
# Clerk delivers user lifecycle events (user.created / user.updated /
# user.deleted) signed with Svix. The signature is checked against the raw
# request body before anything in the payload is trusted.
# =============================================================================

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from svix.webhooks import Webhook, WebhookVerificationError

from app.config import settings
from app.exceptions import WebhookError
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


def verify_webhook(body: bytes, headers: dict[str, str]) -> dict:
    """
    Verify a Svix-signed payload and return the parsed event.

    Raises:
        WebhookError: 500 if no secret is configured, 400 if headers are
            missing or the signature doesn't verify
    """
    if not settings.CLERK_WEBHOOK_SECRET:
        logger.error("CLERK_WEBHOOK_SECRET is not configured")
        raise WebhookError("Missing CLERK_WEBHOOK_SECRET", status_code=500)

    svix_headers = {name: headers.get(name) for name in SVIX_HEADERS}
    if not all(svix_headers.values()):
        raise WebhookError("Missing svix headers")

    try:
        Webhook(settings.CLERK_WEBHOOK_SECRET).verify(body, svix_headers)
    except WebhookVerificationError as e:
        logger.warning(f"Webhook verification failed: {e}")
        raise WebhookError("Webhook verification failed")

    # Newer svix releases return None from verify()
    return json.loads(body)


@router.post("/clerk", response_class=PlainTextResponse)
async def clerk_webhook(request: Request):
    """
    Receive user lifecycle events from Clerk.

    - user.created: insert the users row (500 if that fails)
    - user.updated: sync email and names
    - user.deleted: delete the users row
    Other event types are acknowledged and ignored.
    """
    body = await request.body()
    event = verify_webhook(body, dict(request.headers))

    event_type = event.get("type")
    data = event.get("data") or {}
    logger.info(f"Received webhook {event_type} for {data.get('id')}")

    if event_type == "user.created":
        UserService.create_user(data)
    elif event_type == "user.updated":
        UserService.update_user(data)
    elif event_type == "user.deleted":
        UserService.delete_user(data["id"])

    return "Webhook processed"

# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Clerk signs session tokens with RS256. The public keys are published as a
# JWKS document (CLERK_JWKS_URL) which is fetched and cached for an hour.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Missing credentials are reported as 401 below.
security = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour

SESSION_TOKEN_ALGORITHMS = ["RS256"]


def _fetch_jwks(force: bool = False) -> dict:
    """Fetch the JWKS document with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if not force and _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.CLERK_JWKS_URL, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.CLERK_JWKS_URL}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> dict[str, Any]:
    """
    Find the JWK that signed a token.

    Looks the token's "kid" up in the cached JWKS, refetching once in case
    the keys were rotated.

    Raises:
        JWTError: If the header is unreadable or no key matches
    """
    unverified_header = jwt.get_unverified_header(token)
    kid = unverified_header.get("kid")

    if not kid:
        raise JWTError("Token header is missing 'kid'")

    for force in (False, True):
        for key in _fetch_jwks(force=force).get("keys", []):
            if key.get("kid") == kid:
                return key

    raise JWTError(f"No signing key found for kid={kid}")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_session_token(token: str) -> TokenPayload:
    """
    Verify a session token and return its claims.

    Raises:
        HTTPException: 401 if the token is invalid or expired
    """
    try:
        signing_key = _get_signing_key(token)

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=SESSION_TOKEN_ALGORITHMS,
            issuer=settings.CLERK_ISSUER or None,
            # Session tokens carry no audience
            options={"verify_aud": False},
        )
        return TokenPayload(**payload)

    except ExpiredSignatureError:
        logger.warning("Session token has expired")
        raise _unauthorized("Token has expired")

    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {str(e)}")

    except ValidationError:
        logger.warning("Session token missing required claims")
        raise _unauthorized("Invalid token: missing user ID")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from a Clerk session token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the RS256 signature against the JWKS
    3. Validates expiry (and issuer, when CLERK_ISSUER is set)
    4. Returns an AuthUser with the user's ID

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    claims = decode_session_token(credentials.credentials)

    if not claims.sub:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    logger.debug(f"Authenticated user: {claims.sub}")
    return AuthUser(id=claims.sub, session_id=claims.sid)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[AuthUser]:
    """
    Optionally get the current user from a session token.

    Returns None if no token is provided, instead of raising an error.
    Useful for public endpoints that show extra data to signed-in users.
    """
    if credentials is None:
        return None

    try:
        return await get_current_user(credentials)
    except HTTPException:
        # If token is invalid, treat as no auth rather than error
        return None

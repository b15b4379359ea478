"""
FastAPI dependencies - access control gates for protected routes.
Order per request: token present -> token valid -> role satisfied -> allowed.
Missing or bad tokens are 401; a valid token with the wrong role is 403.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from prometheus_client import Counter

from app.core.errors import AuthError, ForbiddenError
from app.core.security import TokenClaims, decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

AUTH_REJECTIONS = Counter(
    "catalog_auth_rejections_total",
    "Requests rejected by the access control gates",
    ["reason"],
)


def _reject(request: Request, reason: str, error: Exception) -> Exception:
    AUTH_REJECTIONS.labels(reason=reason).inc()
    logger.info("Access denied (%s) on %s %s", reason, request.method, request.url.path)
    return error


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Resolve the bearer token to identity claims. Raises 401 if missing or invalid."""
    if not credentials:
        raise _reject(request, "missing_token", AuthError("Not authorized, no token"))
    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _reject(request, "invalid_token", AuthError("Not authorized, token invalid or expired"))
    request.state.identity = claims
    return claims


async def require_admin(
    request: Request,
    identity: Annotated[TokenClaims, Depends(get_current_identity)],
) -> TokenClaims:
    """Admin-only gate. Runs after authentication, so failures here are 403."""
    if not identity.is_admin:
        raise _reject(request, "forbidden", ForbiddenError("Admin access required"))
    return identity


AdminIdentity = Annotated[TokenClaims, Depends(require_admin)]

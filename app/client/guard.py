"""
Client-side route guards. Mirror the server's token checks so a UI can
redirect early; the server's access control remains authoritative.
"""

import enum
from datetime import datetime, timezone
from typing import Any

from jose import JWTError, jwt

from app.client.session import ClientSession


class GuardDecision(str, enum.Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"


def parse_token(token: str | None) -> dict[str, Any] | None:
    """Read claims without verifying the signature (the client has no secret)."""
    if not token or token.count(".") != 2:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None


def is_token_valid(token: str | None, now: datetime | None = None) -> bool:
    claims = parse_token(token)
    if not claims:
        return False
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return False
    current = now or datetime.now(timezone.utc)
    return exp > current.timestamp()


def guard_private(session: ClientSession, now: datetime | None = None) -> GuardDecision:
    """Routes for any logged-in user. Expired or broken tokens end the session."""
    if not session.token:
        return GuardDecision.REDIRECT_LOGIN
    if not is_token_valid(session.token, now):
        session.clear()
        return GuardDecision.REDIRECT_LOGIN
    return GuardDecision.ALLOW


def guard_admin(session: ClientSession, now: datetime | None = None) -> GuardDecision:
    """Routes for admins only. Non-admins are sent home rather than to login."""
    decision = guard_private(session, now)
    if decision is not GuardDecision.ALLOW:
        return decision
    if session.user is None:
        session.clear()
        return GuardDecision.REDIRECT_LOGIN
    if session.user.role != "admin":
        return GuardDecision.REDIRECT_HOME
    return GuardDecision.ALLOW

from app.client.api import CatalogClient, ClientResult
from app.client.guard import GuardDecision, guard_admin, guard_private, is_token_valid, parse_token
from app.client.session import ClientSession

__all__ = [
    "CatalogClient",
    "ClientResult",
    "ClientSession",
    "GuardDecision",
    "guard_admin",
    "guard_private",
    "is_token_valid",
    "parse_token",
]

"""
Client session - token and public user view kept between runs.
Explicit load/save/clear lifecycle backed by a JSON file.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from app.schemas.user import UserPublic

logger = logging.getLogger(__name__)


class StoredSession(BaseModel):
    token: str
    user: UserPublic


class ClientSession:
    """Holds the caller's credentials. Nothing here is trusted by the server."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self.token: str | None = None
        self.user: UserPublic | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"

    def set(self, token: str, user: UserPublic) -> None:
        self.token = token
        self.user = user
        self.save()

    def load(self) -> "ClientSession":
        """Read the stored session. A missing or corrupt file leaves the session empty."""
        self.token, self.user = None, None
        if self.path is None or not self.path.exists():
            return self
        try:
            stored = StoredSession.model_validate(json.loads(self.path.read_text(encoding="utf-8")))
        except (ValueError, ValidationError) as e:
            logger.warning("Discarding unreadable session file %s: %s", self.path, e)
            self.clear()
            return self
        self.token, self.user = stored.token, stored.user
        return self

    def save(self) -> None:
        if self.path is None:
            return
        if self.token is None or self.user is None:
            self.clear()
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        stored = StoredSession(token=self.token, user=self.user)
        self.path.write_text(stored.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        """Logout: forget credentials in memory and on disk."""
        self.token = None
        self.user = None
        if self.path is not None:
            self.path.unlink(missing_ok=True)

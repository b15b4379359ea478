"""
User repository - credential store adapter over the users table.
"""

from sqlalchemy import select

from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries. Emails are stored already lowercased."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for registration conflicts and login."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

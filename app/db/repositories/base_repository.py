"""
Base repository - generic CRUD over one ORM model.
Design: Services depend on repositories, never on raw sessions; easy to swap in tests.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: str) -> ModelType | None:
        """Fetch single entity by primary key."""
        return await self.session.get(self.model, id)

    async def get_all(self) -> list[ModelType]:
        """Every row in creation order."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at, self.model.id)
        )
        return list(result.scalars().all())

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Get server defaults without committing
        await self.session.refresh(entity)
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        """Flush pending changes on an already-tracked entity."""
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Remove entity from DB."""
        await self.session.delete(entity)
        await self.session.flush()

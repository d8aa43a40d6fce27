"""
Base Repository.

Primary-key access to one mapped class. Every write flushes and refreshes,
so store-assigned values (the UUID, timestamps) are set on the returned
instance before the request's session commits.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stickyboard.backend.core.exceptions import NotFoundError
from stickyboard.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Subclasses bind the model:

        class StickyRepository(BaseRepository[Sticky]):
            model = Sticky
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str) -> ModelType:
        """
        Raises:
            NotFoundError: No row has this ID (mapped to 404 RES_NOT_FOUND)
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.id == str(id)))
        return result.scalar_one_or_none()

    async def create(self, **columns: Any) -> ModelType:
        instance = self.model(**columns)
        self.session.add(instance)
        return await self._written(instance)

    async def update(self, id: str, **columns: Any) -> ModelType:
        """Overwrite the given columns; unknown names are ignored."""
        instance = await self.get_by_id(id)
        for name, value in columns.items():
            if hasattr(instance, name):
                setattr(instance, name, value)
        return await self._written(instance)

    async def delete(self, id: str) -> None:
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()

    async def _written(self, instance: ModelType) -> ModelType:
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

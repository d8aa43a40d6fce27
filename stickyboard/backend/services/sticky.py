"""
Sticky Service.

Business logic layer for stickies. Every write receives the complete note
state, so updates are replacements and repeating one is harmless.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from stickyboard.backend.models.sticky import Sticky
from stickyboard.backend.repositories.sticky import StickyRepository
from stickyboard.backend.schemas.sticky import StickyCreate, StickyUpdate
from stickyboard.backend.services.base import BaseService


class StickyService(BaseService):
    """Service for sticky note storage."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = StickyRepository(session)

    async def create_sticky(self, data: StickyCreate) -> Sticky:
        """
        Create a new sticky.

        Args:
            data: Initial note state

        Returns:
            Stored sticky with its assigned ID
        """
        self._log_operation(
            "Creating sticky",
            color=data.color.value,
            z_index=data.z_index,
        )

        sticky = await self._execute_db_operation(
            "create_sticky",
            self.repo.create_from(data),
        )

        self._log_debug("Sticky created", sticky_id=sticky.id)
        return sticky

    async def get_sticky(self, sticky_id: str) -> Sticky:
        """
        Get a sticky by ID.

        Raises:
            NotFoundError: If sticky not found
        """
        return await self.repo.get_by_id(sticky_id)

    async def list_stickies(self) -> list[Sticky]:
        """List every stored sticky, lowest z-index first."""
        return await self._execute_db_operation("list_stickies", self.repo.list_all())

    async def replace_sticky(self, sticky_id: str, data: StickyUpdate) -> Sticky:
        """
        Replace the stored state of a sticky with a full snapshot.

        Args:
            sticky_id: Sticky ID to update
            data: Complete note state

        Returns:
            Updated sticky

        Raises:
            NotFoundError: If sticky not found
        """
        self._log_debug("Replacing sticky", sticky_id=sticky_id, z_index=data.z_index)

        return await self._execute_db_operation(
            "replace_sticky",
            self.repo.replace(sticky_id, data),
        )

    async def delete_sticky(self, sticky_id: str) -> None:
        """
        Delete a sticky.

        Raises:
            NotFoundError: If sticky not found
        """
        self._log_operation("Deleting sticky", sticky_id=sticky_id)

        await self._execute_db_operation(
            "delete_sticky",
            self.repo.delete(sticky_id),
        )

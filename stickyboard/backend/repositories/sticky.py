"""
Sticky Repository.

Data access layer for stickies. Translates between the nested API shape
and the flat columns of the stickies table.
"""

from typing import Any

from sqlalchemy import select

from stickyboard.backend.models.sticky import Sticky
from stickyboard.backend.repositories.base import BaseRepository
from stickyboard.backend.schemas.sticky import StickyCreate, StickyUpdate


def _columns(data: StickyCreate | StickyUpdate) -> dict[str, Any]:
    """Flatten a sticky payload into column values."""
    return {
        "color": data.color.value,
        "position_x": data.position.x,
        "position_y": data.position.y,
        "width": data.size.width,
        "height": data.size.height,
        "z_index": data.z_index,
        "text": data.text,
    }


class StickyRepository(BaseRepository[Sticky]):
    """Repository for the Sticky model."""

    model = Sticky

    async def list_all(self) -> list[Sticky]:
        """Get every sticky, bottom of the stack first."""
        result = await self.session.execute(
            select(Sticky).order_by(Sticky.z_index.asc(), Sticky.created_at.asc())
        )
        return list(result.scalars().all())

    async def create_from(self, data: StickyCreate) -> Sticky:
        """Insert a sticky built from a creation payload."""
        return await self.create(**_columns(data))

    async def replace(self, id: str, data: StickyUpdate) -> Sticky:
        """
        Overwrite every stored field of a sticky.

        Raises:
            NotFoundError: If sticky not found
        """
        return await self.update(id, **_columns(data))

"""
Sticky Model.

Database model for a sticky note on the board. Position and size are stored
as flat numeric columns; the API nests them as {x, y} and {width, height}.
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stickyboard.backend.models.base import Base, TimestampMixin, UUIDMixin


class Sticky(UUIDMixin, TimestampMixin, Base):
    """
    Sticky note database model.

    One row per note: color category, board position, rendered size,
    stacking order and free-text content.
    """

    __tablename__ = "stickies"

    color: Mapped[str] = mapped_column(String(20), nullable=False)
    position_x: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    position_y: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    z_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Sticky(id={self.id}, color={self.color!r}, z_index={self.z_index})>"

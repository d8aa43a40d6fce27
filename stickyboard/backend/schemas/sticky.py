"""
Sticky Schemas.

Pydantic schemas for sticky API request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from stickyboard.backend.models.sticky import Sticky


class ColorClass(str, Enum):
    """Fixed palette of note colors. Values double as CSS class names."""

    YELLOW = "yellow"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"


class Position(BaseModel):
    """Top-left corner of a note, in pixels relative to the board."""

    x: float = Field(default=0, ge=0, description="Distance from the board's left edge")
    y: float = Field(default=0, ge=0, description="Distance from the board's top edge")


class Size(BaseModel):
    """Rendered box of a note, in pixels."""

    width: float = Field(ge=0, description="Note width", examples=[250])
    height: float = Field(ge=0, description="Note height", examples=[250])


class StickyCreate(BaseModel):
    """Schema for creating a new sticky. Every field has a default."""

    color: ColorClass = Field(default=ColorClass.YELLOW, description="Palette color")
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=lambda: Size(width=250, height=250))
    z_index: int = Field(default=0, ge=0, description="Stacking order")
    text: str = Field(default="", description="Note content, free-form")


class StickyUpdate(BaseModel):
    """
    Schema for replacing a sticky's state.

    Carries the full snapshot, never a diff, so repeating the same
    request leaves the stored note unchanged.
    """

    color: ColorClass
    position: Position
    size: Size
    z_index: int = Field(ge=0)
    text: str


class StickyResponse(BaseModel):
    """Schema for a sticky in API responses."""

    id: str = Field(description="Sticky unique identifier")
    color: ColorClass
    position: Position
    size: Size
    z_index: int
    text: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, sticky: "Sticky") -> "StickyResponse":
        """Build a response from the flat database row."""
        return cls(
            id=sticky.id,
            color=ColorClass(sticky.color),
            position=Position(x=sticky.position_x, y=sticky.position_y),
            size=Size(width=sticky.width, height=sticky.height),
            z_index=sticky.z_index,
            text=sticky.text,
            created_at=sticky.created_at,
            updated_at=sticky.updated_at,
        )

"""
Board Value Types.

Immutable geometry and note-state values passed between the widget,
the board controller and the store client.
"""

from dataclasses import dataclass, replace
from typing import Any

from stickyboard.backend.schemas.sticky import ColorClass


@dataclass(frozen=True)
class Point:
    """A pointer location in board pixels. May be negative (off-board)."""

    x: float
    y: float


@dataclass(frozen=True)
class Position:
    """Top-left corner of a note. Never left of or above the board origin."""

    x: float
    y: float

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position must be non-negative, got ({self.x}, {self.y})")

    @classmethod
    def clamped(cls, x: float, y: float) -> "Position":
        """Build a position, pulling negative coordinates back to the board edge."""
        return cls(x=max(x, 0), y=max(y, 0))

    def to_payload(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def to_payload(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, kw_only=True)
class NoteDraft:
    """The state of a note that the store has not assigned an ID to yet."""

    color: ColorClass
    position: Position
    size: Size
    z_index: int
    text: str

    def to_payload(self) -> dict[str, Any]:
        """Render the state in the store's JSON shape."""
        return {
            "color": self.color.value,
            "position": self.position.to_payload(),
            "size": self.size.to_payload(),
            "z_index": self.z_index,
            "text": self.text,
        }


@dataclass(frozen=True, kw_only=True)
class NoteSnapshot(NoteDraft):
    """The complete persisted state of one note."""

    id: str

    def evolve(self, **changes: Any) -> "NoteSnapshot":
        """Copy with some fields replaced. The ID cannot change."""
        if "id" in changes:
            raise ValueError("A note's id is immutable")
        return replace(self, **changes)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "NoteSnapshot":
        """Build a snapshot from the store's JSON shape."""
        position = data.get("position") or {}
        size = data["size"]
        return cls(
            id=str(data["id"]),
            color=ColorClass(data["color"]),
            position=Position(x=position.get("x", 0), y=position.get("y", 0)),
            size=Size(width=size["width"], height=size["height"]),
            z_index=int(data["z_index"]),
            text=data.get("text") or "",
        )

"""
Board Surface.

The event sources a note widget listens to, modelled on the browser:

    Document     page-level pointer-move / pointer-up channels and the
                 global text-selection flag
    NoteElement  the rendered box of one note: offset, size, and a
                 size-change channel fed by the native resize handle

Subscribing returns a Subscription, which is also a context manager, so
listeners can be held in an ExitStack and released on every exit path.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from stickyboard.board.models import Point, Position, Size

EventT = TypeVar("EventT")


class Subscription:
    """Handle to one registered listener. Cancelling twice is a no-op."""

    def __init__(self, channel: "EventChannel", handler: Callable) -> None:
        self._channel = channel
        self._handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._channel._remove(self._handler)
            self._active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class EventChannel(Generic[EventT]):
    """A named list of listeners, called synchronously in subscription order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[[EventT], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[[EventT], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def emit(self, event: EventT) -> None:
        # Handlers may unsubscribe while being dispatched (pointer-up ends a drag).
        for handler in list(self._handlers):
            handler(event)

    def _remove(self, handler: Callable[[EventT], None]) -> None:
        self._handlers.remove(handler)


@dataclass(frozen=True)
class SizeChange:
    """A new content box size reported by resize observation."""

    width: float
    height: float


class Document:
    """Page-level input events shared by every note on the board."""

    def __init__(self) -> None:
        self.pointer_move: EventChannel[Point] = EventChannel("pointermove")
        self.pointer_up: EventChannel[Point] = EventChannel("pointerup")
        self.text_selection_enabled = True

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer_move.emit(Point(x, y))

    def release_pointer(self, x: float, y: float) -> None:
        self.pointer_up.emit(Point(x, y))


class NoteElement:
    """
    The rendered box of a note.

    The widget writes its position and size here when it renders.
    resize() is the user dragging the native resize handle: it changes the
    box and notifies observers. Rendering never notifies observers.
    """

    def __init__(self, position: Position, size: Size) -> None:
        self.offset_left = position.x
        self.offset_top = position.y
        self.width = size.width
        self.height = size.height
        self.resized: EventChannel[SizeChange] = EventChannel("resize")

    def place(self, position: Position) -> None:
        self.offset_left = position.x
        self.offset_top = position.y

    def apply_size(self, size: Size) -> None:
        self.width = size.width
        self.height = size.height

    def resize(self, width: float, height: float) -> None:
        if (width, height) == (self.width, self.height):
            return
        self.width = width
        self.height = height
        self.resized.emit(SizeChange(width, height))

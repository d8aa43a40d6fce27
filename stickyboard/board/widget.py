"""
Note Widget.

Owns the visual and geometric state of one sticky note and turns user
input into local state changes and debounced saves.

Input arrives the way a browser delivers it:

    pointer_down(point, region)   press on the header, body or text area
    double_click_text()           enter edit mode
    blur_text()                   leave edit mode
    input_text(value)             full current value of the text field
    element.resize(w, h)          native resize handle (observed after mount())
    document.move_pointer(...)    page-level moves, only listened to mid-drag
    document.release_pointer(...) page-level release, ends a drag

Every change to position, size, z-index or text (re)starts a quiet period.
When it elapses the complete current snapshot is sent to the store. A
failed save is logged and dropped; local state is never rolled back.
"""

import asyncio
from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from stickyboard.backend.core.exceptions import PersistenceError
from stickyboard.backend.core.logging import get_logger, log_with_source
from stickyboard.board.models import NoteSnapshot, Point, Position, Size
from stickyboard.board.scheduling import DebouncedCall
from stickyboard.board.stacking import StackingOrder
from stickyboard.board.surface import Document, NoteElement, SizeChange, Subscription

logger = get_logger(__name__)

PLACEHOLDER = "Double click to type..."
SAVE_DEBOUNCE_SECONDS = 0.3


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class Region(str, Enum):
    """Parts of a note that accept a pointer-down."""

    HEADER = "header"
    BODY = "body"
    TEXT = "text"


class NoteStore(Protocol):
    async def update(self, snapshot: NoteSnapshot) -> Any: ...


@dataclass(frozen=True)
class NoteView:
    """What the note looks like on screen right now."""

    left: float
    top: float
    width: float
    height: float
    z_index: int
    css_class: str
    read_only: bool
    placeholder: str
    text: str


class NoteWidget:
    """
    Interactive controller for a single note.

    The widget never creates or destroys notes. Deletion is signalled upward
    through on_delete(id); the board controller owns the collection.
    """

    def __init__(
        self,
        snapshot: NoteSnapshot,
        *,
        store: NoteStore,
        stacking: StackingOrder,
        document: Document,
        on_delete: Callable[[str], None],
        save_delay: float = SAVE_DEBOUNCE_SECONDS,
    ) -> None:
        self.id = snapshot.id
        self.color = snapshot.color
        self._position = snapshot.position
        self._size = snapshot.size
        self._z_index = snapshot.z_index
        self._text = snapshot.text

        self._store = store
        self._stacking = stacking
        self._document = document
        self._on_delete = on_delete

        self.element = NoteElement(snapshot.position, snapshot.size)
        self.is_editable = False
        self.drag_state = DragState.IDLE
        self._drag_offset: Point | None = None
        self._drag_scope: ExitStack | None = None
        self._resize_subscription: Subscription | None = None
        self._mounted = False

        self._save = DebouncedCall(save_delay, self._start_save)
        self._saves: set[asyncio.Task] = set()

        stacking.observe(snapshot.z_index)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def position(self) -> Position:
        return self._position

    @property
    def size(self) -> Size:
        return self._size

    @property
    def z_index(self) -> int:
        return self._z_index

    @property
    def text(self) -> str:
        return self._text

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def save_pending(self) -> bool:
        return self._save.pending

    def snapshot(self) -> NoteSnapshot:
        """The full persisted state as it stands now."""
        return NoteSnapshot(
            id=self.id,
            color=self.color,
            position=self._position,
            size=self._size,
            z_index=self._z_index,
            text=self._text,
        )

    def view(self) -> NoteView:
        return NoteView(
            left=self._position.x,
            top=self._position.y,
            width=self._size.width,
            height=self._size.height,
            z_index=self._z_index,
            css_class=self.color.value,
            read_only=not self.is_editable,
            placeholder=PLACEHOLDER,
            text=self._text,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def mount(self) -> None:
        """Start observing the element's size. Mounting does not save."""
        if self._mounted:
            return
        self._resize_subscription = self.element.resized.subscribe(self._on_resize)
        self._mounted = True
        log_with_source(logger, "board", "debug", "Note mounted", note_id=self.id)

    def unmount(self) -> None:
        """Release every subscription and drop a pending save without sending it."""
        self.cancel_drag()
        if self._save.cancel():
            log_with_source(logger, "board", "debug", "Pending save discarded", note_id=self.id)
        if self._resize_subscription is not None:
            self._resize_subscription.cancel()
            self._resize_subscription = None
        if self._mounted:
            self._mounted = False
            log_with_source(logger, "board", "debug", "Note unmounted", note_id=self.id)

    async def wait_for_saves(self) -> None:
        """Wait for saves already sent to the store. Pending (debounced) saves are not forced."""
        if self._saves:
            await asyncio.gather(*list(self._saves))

    # -------------------------------------------------------------------------
    # Pointer and drag
    # -------------------------------------------------------------------------

    def pointer_down(self, point: Point, region: Region = Region.BODY) -> None:
        """Bring the note to front; a press on the header also starts a drag. Ignored once unmounted."""
        if not self._mounted:
            return
        self.bring_to_front()
        if region is Region.HEADER:
            self._begin_drag(point)

    def bring_to_front(self) -> None:
        if not self._mounted:
            return
        self._set_z_index(self._stacking.bring_to_front())

    def cancel_drag(self) -> None:
        """End a drag in progress. Safe to call when idle."""
        if self._drag_scope is None:
            return
        scope, self._drag_scope = self._drag_scope, None
        scope.close()
        self._drag_offset = None
        self.drag_state = DragState.IDLE

    def _begin_drag(self, point: Point) -> None:
        if self.drag_state is DragState.DRAGGING:
            return
        self._drag_offset = Point(
            point.x - self.element.offset_left,
            point.y - self.element.offset_top,
        )
        with ExitStack() as scope:
            scope.enter_context(self._document.pointer_move.subscribe(self._on_drag_move))
            scope.enter_context(self._document.pointer_up.subscribe(self._on_drag_end))
            self._document.text_selection_enabled = False
            scope.callback(setattr, self._document, "text_selection_enabled", True)
            self._drag_scope = scope.pop_all()
        self.drag_state = DragState.DRAGGING

    def _on_drag_move(self, point: Point) -> None:
        self.is_editable = False
        offset = self._drag_offset
        self._set_position(Position.clamped(point.x - offset.x, point.y - offset.y))

    def _on_drag_end(self, point: Point) -> None:
        self.cancel_drag()

    # -------------------------------------------------------------------------
    # Text editing
    # -------------------------------------------------------------------------

    def double_click_text(self) -> None:
        if self._mounted:
            self.is_editable = True

    def blur_text(self) -> None:
        self.is_editable = False

    def input_text(self, value: str) -> bool:
        """Apply the field's full value. Returns False when read-only or unmounted."""
        if not (self._mounted and self.is_editable):
            return False
        self._set_text(value)
        return True

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def request_delete(self) -> None:
        self._on_delete(self.id)

    # -------------------------------------------------------------------------
    # Change tracking
    # -------------------------------------------------------------------------

    def _on_resize(self, change: SizeChange) -> None:
        self._set_size(Size(width=max(change.width, 0), height=max(change.height, 0)))

    def _set_position(self, position: Position) -> None:
        if position == self._position:
            return
        self._position = position
        self.element.place(position)
        self._changed()

    def _set_size(self, size: Size) -> None:
        if size == self._size:
            return
        self._size = size
        self.element.apply_size(size)
        self._changed()

    def _set_z_index(self, z_index: int) -> None:
        if z_index == self._z_index:
            return
        self._z_index = z_index
        self._changed()

    def _set_text(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        self._changed()

    def _changed(self) -> None:
        if self._mounted:
            self._save.schedule()

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def _start_save(self) -> None:
        snapshot = self.snapshot()
        task = asyncio.get_running_loop().create_task(self._persist(snapshot))
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

    async def _persist(self, snapshot: NoteSnapshot) -> None:
        try:
            await self._store.update(snapshot)
        except PersistenceError as e:
            log_with_source(
                logger,
                "board",
                "warning",
                "Note save failed",
                note_id=snapshot.id,
                operation=e.operation,
                status_code=e.status_code,
                error=e.message,
            )
        except Exception:
            logger.exception("Unexpected error saving note", note_id=snapshot.id, source="board")
        else:
            log_with_source(logger, "board", "debug", "Note saved", note_id=snapshot.id)

"""
Board Controller.

Holds the notes on one board, owns the shared stacking counter, and
handles creating and deleting notes against the sticky store.
"""

import asyncio

from stickyboard.backend.core.config import get_app_config
from stickyboard.backend.core.config_schema import BoardSchema
from stickyboard.backend.core.exceptions import PersistenceError
from stickyboard.backend.core.logging import get_logger, log_with_source
from stickyboard.backend.schemas.sticky import ColorClass
from stickyboard.board.models import NoteDraft, Position, Size
from stickyboard.board.stacking import StackingOrder
from stickyboard.board.surface import Document
from stickyboard.board.widget import NoteWidget
from stickyboard.client.persistence import StickyStoreClient

logger = get_logger(__name__)


class BoardController:
    """
    Collection-level operations for a board.

    Usage:
        board = BoardController(StickyStoreClient())
        await board.load()
        note = await board.create_note(ColorClass.PINK)
        note.pointer_down(Point(60, 50), Region.HEADER)
        ...
        await board.close()
    """

    def __init__(
        self,
        store: StickyStoreClient,
        *,
        document: Document | None = None,
        config: BoardSchema | None = None,
    ) -> None:
        self.store = store
        self.document = document if document is not None else Document()
        self.config = config if config is not None else get_app_config().board
        self.stacking = StackingOrder()
        self._widgets: dict[str, NoteWidget] = {}
        self._deletions: set[asyncio.Task] = set()

    @property
    def notes(self) -> list[NoteWidget]:
        """Widgets from bottom to top."""
        return sorted(self._widgets.values(), key=lambda widget: widget.z_index)

    @property
    def save_delay(self) -> float:
        return self.config.save_debounce_ms / 1000

    def get(self, note_id: str) -> NoteWidget | None:
        return self._widgets.get(note_id)

    async def load(self) -> list[NoteWidget]:
        """Replace the board's contents with what the store holds."""
        snapshots = await self.store.list_all()
        for widget in self._widgets.values():
            widget.unmount()
        self._widgets.clear()

        for snapshot in snapshots:
            self.stacking.observe(snapshot.z_index)
            self._mount(snapshot)

        log_with_source(
            logger,
            "board",
            "info",
            "Board loaded",
            note_count=len(snapshots),
            max_z_index=self.stacking.max_z_index,
        )
        return self.notes

    async def create_note(self, color: ColorClass | str | None = None) -> NoteWidget:
        """
        Store a new note with the configured defaults and put it on top.

        Raises:
            PersistenceError: The store did not accept the note.
        """
        config = self.config
        draft = NoteDraft(
            color=ColorClass(color or config.default_color),
            position=Position(config.default_position.x, config.default_position.y),
            size=Size(config.default_size.width, config.default_size.height),
            z_index=self.stacking.bring_to_front(),
            text=config.default_text,
        )
        snapshot = await self.store.create(draft)
        widget = self._mount(snapshot)
        log_with_source(
            logger,
            "board",
            "info",
            "Note created",
            note_id=snapshot.id,
            color=snapshot.color.value,
            z_index=snapshot.z_index,
        )
        return widget

    async def delete_note(self, note_id: str) -> bool:
        """
        Take a note off the board and ask the store to forget it.

        Returns False if the note was not on the board. A failed remote
        delete is logged; the note stays off the board.
        """
        widget = self._widgets.pop(note_id, None)
        if widget is None:
            return False
        widget.unmount()

        try:
            await self.store.delete(note_id)
        except PersistenceError as e:
            log_with_source(
                logger,
                "board",
                "warning",
                "Note delete failed",
                note_id=note_id,
                status_code=e.status_code,
                error=e.message,
            )
        else:
            log_with_source(logger, "board", "info", "Note deleted", note_id=note_id)
        return True

    async def close(self) -> None:
        """Unmount every note and wait for saves and deletes already in flight."""
        widgets = list(self._widgets.values())
        for widget in widgets:
            widget.unmount()
        for widget in widgets:
            await widget.wait_for_saves()
        if self._deletions:
            await asyncio.gather(*list(self._deletions))

    def _mount(self, snapshot) -> NoteWidget:
        widget = NoteWidget(
            snapshot,
            store=self.store,
            stacking=self.stacking,
            document=self.document,
            on_delete=self._on_delete,
            save_delay=self.save_delay,
        )
        widget.mount()
        self._widgets[snapshot.id] = widget
        return widget

    def _on_delete(self, note_id: str) -> None:
        task = asyncio.get_running_loop().create_task(self.delete_note(note_id))
        self._deletions.add(task)
        task.add_done_callback(self._deletions.discard)

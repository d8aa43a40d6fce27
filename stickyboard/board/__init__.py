"""
Sticky Board.

Headless, event-driven model of the board running on the asyncio loop.

- models.py: Position, Size, NoteDraft and NoteSnapshot value types
- surface.py: Document and NoteElement, the event sources a widget subscribes to
- stacking.py: StackingOrder, the shared "highest z-index" counter
- scheduling.py: DebouncedCall, the per-note cancellable save timer
- widget.py: NoteWidget, one note's drag/edit/resize state machine
- controller.py: BoardController, the collection of widgets
"""

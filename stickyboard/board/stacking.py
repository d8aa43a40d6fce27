"""
Stacking Order.

The board-wide "highest z-index so far" counter. Owned by the board
controller and handed to every note widget by reference.
"""

from stickyboard.backend.core.logging import get_logger

logger = get_logger(__name__)


class StackingOrder:
    """
    Monotonic z-index counter shared by all notes on one board.

    The value only ever grows, so the most recently raised note always sits
    at or above every other note.
    """

    def __init__(self, initial: int = 0) -> None:
        if initial < 0:
            raise ValueError("initial z-index must be non-negative")
        self._max_z_index = initial

    @property
    def max_z_index(self) -> int:
        return self._max_z_index

    def bring_to_front(self) -> int:
        """Claim the next z-index above every note on the board."""
        self._max_z_index += 1
        return self._max_z_index

    def observe(self, z_index: int) -> None:
        """Account for a z-index that already exists (e.g. a stored note)."""
        if z_index > self._max_z_index:
            logger.debug("Stacking counter raised", previous=self._max_z_index, observed=z_index)
            self._max_z_index = z_index

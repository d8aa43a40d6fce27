"""
Debounced Scheduling.

A cancellable delayed call on the running asyncio loop. Scheduling again
before the delay elapses supersedes the earlier call, so a burst of
triggers produces exactly one call, a quiet period after the last one.
"""

import asyncio
from collections.abc import Callable


class DebouncedCall:
    """
    Per-owner debounce timer.

    schedule() must be called from inside a running event loop.

    Usage:
        saver = DebouncedCall(0.3, widget.flush)
        saver.schedule()   # fires in 300ms...
        saver.schedule()   # ...no, in 300ms from now
        saver.cancel()     # never fires
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """Cancel any pending call and start a fresh quiet period."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> bool:
        """Drop the pending call without running it. Returns whether one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()

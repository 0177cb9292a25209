"""Single-shot, resettable, cancelable scheduled task on the asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class DebouncedTask:
    """Run a coroutine once a quiet period has passed without re-arming.

    ``arm()`` (re)starts the timer, dropping any earlier schedule. ``cancel()``
    drops a pending schedule and is a no-op when nothing is pending. Once the
    timer fires the coroutine runs as an ``asyncio.Task``; cancelling after
    that point does not stop it, the owner is expected to discard its result.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[object]]):
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        """True while armed and waiting for the quiet period to elapse."""
        return self._handle is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> bool:
        """Drop the pending schedule. Returns True if one was dropped."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self._callback())
        self._task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Scheduled task failed", exc_info=task.exception())

    async def wait(self) -> None:
        """Wait for the pending schedule to fire and its task to finish."""
        while self._handle is not None:
            await asyncio.sleep(min(self.delay, 0.05))
        if self._task is not None:
            await asyncio.shield(self._task)

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, Set, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Coalesces bursts of submissions into one action call.

    Each ``submit`` restarts the quiet interval; only the last value
    submitted before the interval elapses is acted on. Actions that
    have already started are never cancelled.
    """

    def __init__(
        self,
        action: Callable[[T], Awaitable[Any]],
        delay_s: float,
        *,
        name: str = "linkograph.debounce",
    ) -> None:
        self.action = action
        self.delay_s = delay_s
        self.last_error: Optional[BaseException] = None

        self._logger = logging.getLogger(name)
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_value: Optional[T] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def busy(self) -> bool:
        return self.pending or bool(self._running)

    def submit(self, value: T) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._pending_value = value
        self._handle = loop.call_later(self.delay_s, self._fire)

    def run_now(self, value: T) -> asyncio.Task:
        """
        Skip the quiet interval and start the action immediately.
        """
        self.cancel()
        self._pending_value = value
        return self._fire()

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._pending_value = None
        return True

    async def flush(self) -> None:
        """
        Start any pending action now and wait for every in-flight one.
        """
        if self._handle is not None:
            self._handle.cancel()
            self._fire()
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fire(self) -> asyncio.Task:
        value = self._pending_value
        self._handle = None
        self._pending_value = None

        task = asyncio.ensure_future(self.action(value))
        self._running.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            self.last_error = None
            return
        self.last_error = error
        self._logger.error("debounced action failed: %s", error, exc_info=error)

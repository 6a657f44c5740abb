"""
Flush schedulers.

The event log never flushes inline with a hook call. It hands a flush
callback to a scheduler, which runs it on the next tick of whatever loop
drives the host.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable

from lifetrace.errors import ConfigurationError, SchedulerUnavailableError

logger = logging.getLogger(__name__)


class FlushScheduler(ABC):
    """Runs callbacks on a later tick."""

    @abstractmethod
    def call_soon(self, callback: Callable[[], None]) -> None:
        """
        Arrange for ``callback`` to run on the next tick.

        Raises:
            SchedulerUnavailableError: If the callback cannot be scheduled.
        """
        pass

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """
        Arrange for ``callback`` to run after ``delay`` seconds.

        Schedulers without a clock treat a delay as one tick.

        Raises:
            SchedulerUnavailableError: If the callback cannot be scheduled.
        """
        self.call_soon(callback)


class ImmediateScheduler(FlushScheduler):
    """Runs callbacks synchronously. Every append is visible at once."""

    def call_soon(self, callback: Callable[[], None]) -> None:
        callback()


class ManualScheduler(FlushScheduler):
    """
    Deterministic tick queue.

    Nothing runs until the owner advances the clock, which makes flush
    timing fully controllable in tests and step-through demos.
    """

    def __init__(self) -> None:
        self._queue: deque[Callable[[], None]] = deque()
        self._lock = threading.Lock()

    def call_soon(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._queue.append(callback)

    @property
    def pending_count(self) -> int:
        """Number of callbacks waiting for a tick."""
        with self._lock:
            return len(self._queue)

    def run_pending(self) -> int:
        """
        Advance one tick.

        Only callbacks queued before this call run; callbacks they schedule
        wait for the next tick.

        Returns:
            Number of callbacks run.
        """
        with self._lock:
            batch = list(self._queue)
            self._queue.clear()
        for callback in batch:
            callback()
        return len(batch)

    def run_all(self, max_ticks: int = 1000) -> int:
        """
        Advance ticks until the queue is empty.

        Args:
            max_ticks: Guard against callbacks that reschedule forever.

        Returns:
            Total number of callbacks run.
        """
        total = 0
        for _ in range(max_ticks):
            ran = self.run_pending()
            if ran == 0:
                return total
            total += ran
        logger.warning("ManualScheduler still busy after %d ticks", max_ticks)
        return total


class AsyncioScheduler(FlushScheduler):
    """
    Schedules callbacks on an asyncio event loop.

    Uses the loop given at construction, or the running loop at call time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise SchedulerUnavailableError("No running event loop to schedule on", cause=e) from e
        if loop.is_closed():
            raise SchedulerUnavailableError("Event loop is closed")
        return loop

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._resolve_loop().call_soon_threadsafe(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        loop = self._resolve_loop()
        loop.call_soon_threadsafe(loop.call_later, delay, callback)


def create_scheduler(mode: str) -> FlushScheduler:
    """
    Build a scheduler for a configured flush mode.

    Args:
        mode: "asyncio", "manual" or "sync".

    Raises:
        ConfigurationError: For an unknown mode.
    """
    if mode == "asyncio":
        return AsyncioScheduler()
    if mode == "manual":
        return ManualScheduler()
    if mode == "sync":
        return ImmediateScheduler()
    raise ConfigurationError(f"Unknown flush mode {mode!r}")

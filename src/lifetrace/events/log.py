"""
Ordered hook log with batched flushing.

Entries get their sequence number when they are appended and sit in a
pending buffer until a scheduled flush moves them into the visible log.
Appends made within one synchronous burst coalesce into a single flush.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from lifetrace.events.base import LogEntry
from lifetrace.events.scheduler import AsyncioScheduler, FlushScheduler

logger = logging.getLogger(__name__)

FlushListener = Callable[[tuple[LogEntry, ...]], object]


@dataclass
class EventLogStats:
    """Statistics for an event log."""

    entries_appended: int = 0
    flushes: int = 0
    sync_fallbacks: int = 0
    listener_errors: int = 0


class EventLog:
    """
    Ordered, append-only hook log with batched flushing.

    Supports:
    - Sequence numbers assigned at append time, so call order survives batching
    - At most one outstanding flush; later appends coalesce into it
    - Synchronous fallback when the scheduler cannot take the flush
    - Flush listeners, isolated from each other's failures
    - Immediate clear that also cancels an outstanding flush
    """

    def __init__(self, scheduler: FlushScheduler | None = None) -> None:
        """
        Initialize the event log.

        Args:
            scheduler: Runs deferred flushes. Defaults to the running asyncio loop.
        """
        self._scheduler = scheduler or AsyncioScheduler()
        self._visible: list[LogEntry] = []
        self._pending: list[LogEntry] = []
        self._sequence = 0
        self._epoch = 0
        self._flush_scheduled = False
        self._notifying = False
        self._flush_requested = False
        self._fallback_warned = False
        self._listeners: dict[str, FlushListener] = {}
        self._lock = threading.RLock()
        self._stats = EventLogStats()

    @property
    def scheduler(self) -> FlushScheduler:
        """The scheduler deferred flushes run on."""
        return self._scheduler

    def append(
        self,
        instance_label: str,
        hook_name: str | None,
        message: str,
        is_custom_trace: bool = False,
    ) -> LogEntry:
        """
        Record an entry and schedule a flush.

        Args:
            instance_label: Label of the instance the entry belongs to.
            hook_name: Hook the entry belongs to.
            message: Text shown in the log.
            is_custom_trace: Whether the traced object emitted it itself.

        Returns:
            The entry, with its sequence number assigned.
        """
        with self._lock:
            self._sequence += 1
            entry = LogEntry(
                sequence=self._sequence,
                instance_label=instance_label,
                hook_name=hook_name,
                message=message,
                is_custom_trace=is_custom_trace,
            )
            self._pending.append(entry)
            self._stats.entries_appended += 1

        self.schedule_flush()
        return entry

    def schedule_flush(self) -> None:
        """
        Arrange for the pending buffer to be flushed on the next tick.

        Does nothing when a flush is already outstanding. If the scheduler
        refuses the callback the buffer is flushed right away instead.
        """
        with self._lock:
            if self._flush_scheduled:
                return
            self._flush_scheduled = True
            epoch = self._epoch

        try:
            self._scheduler.call_soon(lambda: self._run_scheduled_flush(epoch))
        except Exception as e:
            with self._lock:
                self._stats.sync_fallbacks += 1
                warn = not self._fallback_warned
                self._fallback_warned = True
            if warn:
                logger.warning("Flush scheduling failed, flushing synchronously from now on: %s", e)
            else:
                logger.debug("Flush scheduling failed again: %s", e)
            self.flush()

    def _run_scheduled_flush(self, epoch: int) -> None:
        """Scheduler callback. Stale after a clear."""
        with self._lock:
            if epoch != self._epoch:
                return
        self.flush()

    def flush(self) -> tuple[LogEntry, ...]:
        """
        Move the pending buffer into the visible log and notify listeners.

        Entries appended by a listener go to the pending buffer. With a
        deferring scheduler they are picked up by a later scheduled flush.
        A flush requested while listeners are being notified (a synchronous
        scheduler, or the fallback) is not run in place: every listener
        first receives the current batch, then the requested entries follow
        as the next batch.

        Returns:
            The entries made visible by this call, in sequence order.
        """
        with self._lock:
            if self._notifying:
                self._flush_requested = True
                self._flush_scheduled = False
                return ()
            self._flush_scheduled = False
            batch = self._take_pending()
            if not batch:
                return batch
            self._notifying = True
            listeners = list(self._listeners.items())

        flushed: list[LogEntry] = []
        try:
            while True:
                flushed.extend(batch)
                self._notify(listeners, batch)
                with self._lock:
                    batch = self._take_pending() if self._flush_requested else ()
                    self._flush_requested = False
                    if not batch:
                        self._notifying = False
                        break
                    listeners = list(self._listeners.items())
        except BaseException:
            with self._lock:
                self._notifying = False
                self._flush_requested = False
            raise
        return tuple(flushed)

    def _take_pending(self) -> tuple[LogEntry, ...]:
        """Move the pending buffer to the visible log. Caller holds the lock."""
        batch = tuple(self._pending)
        self._pending = []
        if batch:
            self._visible.extend(batch)
            self._stats.flushes += 1
        return batch

    def snapshot(self) -> tuple[LogEntry, ...]:
        """Visible entries in ascending sequence order. Does not flush."""
        with self._lock:
            return tuple(self._visible)

    def pending(self) -> tuple[LogEntry, ...]:
        """Entries appended but not yet flushed."""
        with self._lock:
            return tuple(self._pending)

    def clear(self) -> None:
        """
        Empty the visible log and the pending buffer, effective immediately.

        Resets the sequence counter and cancels any outstanding flush.
        Listeners receive an empty batch.
        """
        with self._lock:
            self._visible.clear()
            self._pending.clear()
            self._sequence = 0
            self._epoch += 1
            self._flush_scheduled = False
            listeners = list(self._listeners.items())

        self._notify(listeners, ())

    def subscribe(self, listener_id: str, handler: FlushListener) -> None:
        """
        Register a flush listener.

        Args:
            listener_id: Unique identifier for this listener.
            handler: Called with each flushed batch, and with () after a clear.
        """
        with self._lock:
            self._listeners[listener_id] = handler

    def unsubscribe(self, listener_id: str) -> bool:
        """
        Remove a flush listener.

        Returns:
            True if the listener was found and removed.
        """
        with self._lock:
            return self._listeners.pop(listener_id, None) is not None

    def _notify(self, listeners: list[tuple[str, FlushListener]], batch: tuple[LogEntry, ...]) -> None:
        for listener_id, handler in listeners:
            try:
                handler(batch)
            except Exception as e:
                with self._lock:
                    self._stats.listener_errors += 1
                logger.exception("Error in log listener %s: %s", listener_id, e)

    @property
    def stats(self) -> EventLogStats:
        """Get current statistics."""
        with self._lock:
            return EventLogStats(
                entries_appended=self._stats.entries_appended,
                flushes=self._stats.flushes,
                sync_fallbacks=self._stats.sync_fallbacks,
                listener_errors=self._stats.listener_errors,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._visible)


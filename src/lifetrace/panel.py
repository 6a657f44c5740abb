"""
Read models for the hook panel and the log view.

Nothing here draws anything. These helpers turn the registry, the log and
the correlation index into the rows and lines a display layer shows.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from lifetrace.errors import ConfigurationError, SchedulerUnavailableError
from lifetrace.events.base import LogEntry
from lifetrace.events.correlation import CorrelationIndex
from lifetrace.events.log import EventLog
from lifetrace.events.scheduler import FlushScheduler
from lifetrace.hooks.descriptors import CapabilitySet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanelRow:
    """One hook row of the panel."""

    name: str
    position: int
    is_implemented: bool
    is_highlighted: bool = False


def capabilities_of(instrumented_class: type) -> CapabilitySet:
    """The hook set an instrumented class was wrapped with."""
    capabilities = getattr(instrumented_class, "__lifetrace_capabilities__", None)
    if capabilities is None:
        raise ConfigurationError(f"{instrumented_class.__name__} is not instrumented")
    return capabilities  # type: ignore[no-any-return]


def panel_rows(instrumented_class: type, highlighted: str | None = None) -> list[PanelRow]:
    """
    Rows for the hook panel of an instrumented class.

    Args:
        instrumented_class: Class returned by a wrap call.
        highlighted: Hook name to highlight; at most one row matches.

    Returns:
        One row per hook of the class's capability set, in panel order.
    """
    return [
        PanelRow(
            name=hook.name,
            position=i,
            is_implemented=CorrelationIndex.is_implemented(instrumented_class, hook.name),
            is_highlighted=hook.name == highlighted,
        )
        for i, hook in enumerate(capabilities_of(instrumented_class))
    ]


def highlight_for(entry: LogEntry | None) -> str | None:
    """Panel row a log entry highlights."""
    if entry is None:
        return None
    return CorrelationIndex.method_for_entry(entry)


def format_log_lines(entries: Iterable[LogEntry]) -> list[str]:
    """Log view lines, numbered by position: `` 0 Child-1: constructor``."""
    return [entry.format(i) for i, entry in enumerate(entries)]


class LogReplay:
    """
    Steps a highlight cursor through the log, one entry per tick.

    When new entries are flushed while the cursor is idle, it jumps to the
    first of them and walks forward from there until it reaches the last
    entry. Steps are scheduled with ``call_later(interval, ...)`` on a
    FlushScheduler, so with a ManualScheduler each ``run_pending()`` moves
    the highlight by exactly one entry. When the scheduler cannot take a
    step the cursor moves straight to the last entry.
    """

    def __init__(self, log: EventLog, scheduler: FlushScheduler | None = None, interval: float = 0.0) -> None:
        """
        Start following a log.

        Args:
            log: The log to replay.
            scheduler: Tick source. Defaults to the log's own scheduler.
            interval: Seconds between steps, for schedulers with a clock.
        """
        self._log = log
        self._scheduler = scheduler or log.scheduler
        self._interval = interval
        self._lock = threading.Lock()
        self._position: int | None = None
        self._stepping = False
        self._epoch = 0
        self._in_step = False
        self._requested_epoch: int | None = None
        self._subscription_id = f"replay-{id(self)}"
        log.subscribe(self._subscription_id, self._on_flush)

    @property
    def position(self) -> int | None:
        """Index of the highlighted entry in the visible log."""
        with self._lock:
            return self._position

    @property
    def highlighted_entry(self) -> LogEntry | None:
        """The highlighted entry, if any."""
        position = self.position
        if position is None:
            return None
        entries = self._log.snapshot()
        return entries[position] if position < len(entries) else None

    @property
    def highlighted_hook(self) -> str | None:
        """Panel row name the highlighted entry maps to."""
        return highlight_for(self.highlighted_entry)

    def highlights(self) -> list[bool]:
        """One flag per visible entry; true only at the cursor."""
        position = self.position
        return [i == position for i in range(len(self._log))]

    def select(self, position: int) -> LogEntry:
        """
        Move the cursor to an entry and stop stepping, as hovering does.

        Raises:
            IndexError: If there is no visible entry at ``position``.
        """
        entry = self._log.snapshot()[position]
        with self._lock:
            self._position = position
            self._stepping = False
            self._epoch += 1
        return entry

    def _on_flush(self, batch: tuple[LogEntry, ...]) -> None:
        with self._lock:
            self._epoch += 1
            if not batch:
                self._position = None
                self._stepping = False
                return
            if not self._stepping:
                self._position = len(self._log) - len(batch)
                self._stepping = True
            epoch = self._epoch
        self._schedule_step(epoch)

    def _schedule_step(self, epoch: int) -> None:
        try:
            self._scheduler.call_later(self._interval, lambda: self._step(epoch))
        except SchedulerUnavailableError as e:
            logger.debug("Replay cannot schedule a step, moving to the last entry: %s", e)
            with self._lock:
                if epoch == self._epoch and self._stepping:
                    self._position = len(self._log) - 1
                    self._stepping = False

    def _advance(self, epoch: int) -> int | None:
        """Move one entry forward. Returns the epoch to schedule the next step with."""
        with self._lock:
            if epoch != self._epoch or not self._stepping or self._position is None:
                return None
            if self._position >= len(self._log) - 1:
                self._stepping = False
                return None
            self._position += 1
            return self._epoch

    def _step(self, epoch: int) -> None:
        with self._lock:
            if self._in_step:
                # Synchronous scheduler: the outer step loop takes it from here
                self._requested_epoch = epoch
                return
            self._in_step = True
        try:
            next_epoch: int | None = epoch
            while next_epoch is not None:
                next_epoch = self._advance(next_epoch)
                if next_epoch is None:
                    break
                self._schedule_step(next_epoch)
                with self._lock:
                    next_epoch, self._requested_epoch = self._requested_epoch, None
        finally:
            with self._lock:
                self._in_step = False

    def close(self) -> None:
        """Stop following the log."""
        self._log.unsubscribe(self._subscription_id)

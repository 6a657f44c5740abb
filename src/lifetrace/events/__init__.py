"""
Hook event log for lifetrace.

Entries are sequenced when appended, buffered, and made visible by batched
flushes that run on a FlushScheduler tick. The correlation index is a read
model over the visible log.
"""

from lifetrace.events.base import LogEntry
from lifetrace.events.correlation import CorrelationIndex
from lifetrace.events.log import EventLog, EventLogStats, FlushListener
from lifetrace.events.scheduler import (
    AsyncioScheduler,
    FlushScheduler,
    ImmediateScheduler,
    ManualScheduler,
    create_scheduler,
)

__all__ = [
    "AsyncioScheduler",
    "CorrelationIndex",
    "EventLog",
    "EventLogStats",
    "FlushListener",
    "FlushScheduler",
    "ImmediateScheduler",
    "LogEntry",
    "ManualScheduler",
    "create_scheduler",
]

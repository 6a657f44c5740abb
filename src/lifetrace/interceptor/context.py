"""
Context variable tracking of the hooks currently running.

Custom traces are attributed to the innermost running hook. Static hooks
have no instance to trace through, so they use the module-level ``trace``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lifetrace.errors import TraceContextError

if TYPE_CHECKING:
    from lifetrace.events.base import LogEntry
    from lifetrace.events.log import EventLog


@dataclass(frozen=True)
class ActiveCall:
    """A traced hook that is currently on the stack."""

    log: EventLog
    instance_label: str
    hook_name: str


_active_calls: ContextVar[tuple[ActiveCall, ...]] = ContextVar("lifetrace_active_calls", default=())


@contextmanager
def active_call(call: ActiveCall) -> Iterator[ActiveCall]:
    """Mark ``call`` as running for the duration of the block."""
    token = _active_calls.set(_active_calls.get() + (call,))
    try:
        yield call
    finally:
        _active_calls.reset(token)


def current_call() -> ActiveCall | None:
    """The innermost running traced hook, if any."""
    calls = _active_calls.get()
    return calls[-1] if calls else None


def current_call_for(log: EventLog, instance_label: str) -> ActiveCall | None:
    """The innermost running hook of one particular instance."""
    for call in reversed(_active_calls.get()):
        if call.log is log and call.instance_label == instance_label:
            return call
    return None


def trace(message: str) -> LogEntry:
    """
    Record a custom trace against the innermost running hook.

    Args:
        message: Text to show in the log.

    Returns:
        The recorded entry.

    Raises:
        TraceContextError: If no traced hook is running.
    """
    call = current_call()
    if call is None:
        raise TraceContextError(f"trace({message!r}) called outside of a traced hook")
    return call.log.append(call.instance_label, call.hook_name, message, is_custom_trace=True)

"""Errors raised while instrumented instances are live."""

from __future__ import annotations

from lifetrace.error_codes import ErrorCode
from lifetrace.errors.base import LifetraceError


class RegistryKeyCollision(LifetraceError):
    """An instance was labeled twice.

    This is a programming error: labels are only handed out by the
    registry, once per constructed instance.
    """

    code = 202
    default_error_code = ErrorCode.REGISTRY_COLLISION

    def __init__(self, message: str, *, existing_label: str = "", new_label: str = "") -> None:
        super().__init__(message)
        self.existing_label = existing_label
        self.new_label = new_label


class TraceContextError(LifetraceError):
    """A custom trace was emitted with no instrumented hook running."""

    code = 203
    default_error_code = ErrorCode.TRACE_CONTEXT_MISSING


class SchedulerUnavailableError(LifetraceError):
    """The flush scheduler cannot accept callbacks.

    The event log and the replay cursor catch this and fall back to doing
    the work synchronously.
    """

    code = 204
    default_error_code = ErrorCode.SCHEDULER_UNAVAILABLE

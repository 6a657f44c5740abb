"""
Trace sessions.

A TraceSession bundles one identity registry, one event log, the
correlation index over that log and the interceptor that feeds it. Tests
and demos that want isolation create their own session; everything else
shares the process-wide default session.

Usage:
    from lifetrace import TraceSession, ManualScheduler

    session = TraceSession(scheduler=ManualScheduler())
    TracedChild = session.wrap(Child)

    host.mount(TracedChild, props={})
    session.scheduler.run_all()
    for line in format_log_lines(session.log.snapshot()):
        print(line)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, overload

from lifetrace.config import LifetraceConfig, get_config
from lifetrace.events.correlation import CorrelationIndex
from lifetrace.events.log import EventLog
from lifetrace.events.scheduler import FlushScheduler, create_scheduler
from lifetrace.hooks.descriptors import CapabilitySet
from lifetrace.interceptor.interceptor import HookInterceptor
from lifetrace.logging import session_logger
from lifetrace.panel import LogReplay
from lifetrace.registry import IdentityRegistry


class TraceSession:
    """Registry, log, correlation index and interceptor that belong together."""

    def __init__(
        self,
        registry: IdentityRegistry | None = None,
        log: EventLog | None = None,
        scheduler: FlushScheduler | None = None,
        name: str = "default",
        replay_interval_ms: int = 1000,
    ) -> None:
        """
        Initialize the session.

        Args:
            registry: Identity registry to use. A fresh one by default.
            log: Event log to use. A fresh one on ``scheduler`` by default.
            scheduler: Scheduler for a freshly created log.
            name: Bound to the session's structured log records.
            replay_interval_ms: Delay between steps of replays made by ``replay()``.
        """
        self.name = name
        self.replay_interval_ms = replay_interval_ms
        self.registry = registry or IdentityRegistry()
        self.log = log or EventLog(scheduler=scheduler)
        self.correlation = CorrelationIndex(self.log)
        self.interceptor = HookInterceptor(self.registry, self.log, session_name=name)
        self._logger = session_logger(name)

    @classmethod
    def from_config(cls, config: LifetraceConfig) -> TraceSession:
        """Build a session with the scheduler and name a config asks for."""
        config.validate()
        return cls(
            scheduler=create_scheduler(config.flush_mode),
            name=config.session_name,
            replay_interval_ms=config.replay_interval_ms,
        )

    @property
    def scheduler(self) -> FlushScheduler:
        """Scheduler the session's log flushes on."""
        return self.log.scheduler

    def wrap(
        self,
        target_class: type,
        capability_set: CapabilitySet | str | None = None,
        display_name: str | None = None,
    ) -> type:
        """Instrument a class so its hooks are recorded in this session's log."""
        instrumented = self.interceptor.wrap(target_class, capability_set, display_name)
        self._logger.info(
            "class_instrumented",
            target=target_class.__qualname__,
            capability_set=instrumented.__lifetrace_capabilities__.name,  # type: ignore[attr-defined]
        )
        return instrumented

    def replay(self) -> LogReplay:
        """Follow this session's log with a highlight cursor."""
        return LogReplay(self.log, interval=self.replay_interval_ms / 1000)

    def clear_log(self) -> None:
        """Empty the log immediately. Instance labels are untouched."""
        self.log.clear()
        self._logger.info("log_cleared")

    def reset_identity(self) -> None:
        """Restart every class's label counter at 1. The log is untouched."""
        self.registry.reset()
        self._logger.info("identity_reset")

    def reset(self) -> None:
        """Clear the log and reset identities, for a fresh observation session."""
        self.clear_log()
        self.reset_identity()

    def close(self) -> None:
        """Detach the correlation index from the log."""
        self.correlation.close()


# Global default session
_default_session: TraceSession | None = None
_session_lock = threading.Lock()


def get_default_session() -> TraceSession:
    """Get the process-wide session, building it from config on first use."""
    global _default_session
    if _default_session is None:
        with _session_lock:
            if _default_session is None:
                _default_session = TraceSession.from_config(get_config())
    return _default_session


def configure_default_session(
    config: LifetraceConfig | None = None,
    scheduler: FlushScheduler | None = None,
) -> TraceSession:
    """
    Replace the process-wide session.

    Args:
        config: Session settings. Loaded from the environment when None.
        scheduler: Overrides the scheduler the config would select.

    Returns:
        The configured session.
    """
    global _default_session
    config = config or get_config()
    config.validate()
    with _session_lock:
        if _default_session is not None:
            _default_session.close()
        _default_session = TraceSession(
            scheduler=scheduler or create_scheduler(config.flush_mode),
            name=config.session_name,
            replay_interval_ms=config.replay_interval_ms,
        )
    return _default_session


def reset_default_session() -> None:
    """Drop the process-wide session (for testing)."""
    global _default_session
    with _session_lock:
        if _default_session is not None:
            _default_session.close()
        _default_session = None


@overload
def trace_lifecycle(cls: type) -> type: ...


@overload
def trace_lifecycle(
    cls: None = None,
    *,
    capability_set: CapabilitySet | str | None = None,
    session: TraceSession | None = None,
    display_name: str | None = None,
) -> Callable[[type], type]: ...


def trace_lifecycle(
    cls: type | None = None,
    *,
    capability_set: CapabilitySet | str | None = None,
    session: TraceSession | None = None,
    display_name: str | None = None,
) -> Any:
    """
    Class decorator that instruments a traced class.

    Usable bare (``@trace_lifecycle``) or with options
    (``@trace_lifecycle(capability_set=LEGACY_HOOKS)``). Without a session
    the default session is used.
    """

    def decorate(target: type) -> type:
        return (session or get_default_session()).wrap(target, capability_set, display_name)

    if cls is not None:
        return decorate(cls)
    return decorate


def clear_log() -> None:
    """Clear the default session's log."""
    get_default_session().clear_log()


def reset_identity() -> None:
    """Reset the default session's instance label counters."""
    get_default_session().reset_identity()


# Name used by the log panel's reset control
clear_instance_id_counters = reset_identity

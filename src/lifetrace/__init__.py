"""
lifetrace - lifecycle hook tracing for component-style objects.

This package records every call a host runtime makes to the lifecycle
hooks of instrumented objects:
- Per-class instance labels ("Child-1", "Child-2", ...)
- An ordered hook log flushed in batches on a scheduler tick
- Custom traces emitted from inside hooks, interleaved in call order
- Correlation between log entries and the hooks that produced them
- Modern and legacy hook sets, detected from the hooks a class defines
"""

__version__ = "0.3.0"

from lifetrace.config import LifetraceConfig, get_config, reset_config
from lifetrace.error_codes import ErrorCode, classify_error
from lifetrace.errors import (
    ConfigurationError,
    LifetraceError,
    RegistryKeyCollision,
    SchedulerUnavailableError,
    TraceContextError,
    UnsupportedCapabilitySet,
)
from lifetrace.events import (
    AsyncioScheduler,
    CorrelationIndex,
    EventLog,
    EventLogStats,
    FlushScheduler,
    ImmediateScheduler,
    LogEntry,
    ManualScheduler,
    create_scheduler,
)
from lifetrace.hooks import (
    LEGACY_HOOKS,
    MODERN_HOOKS,
    CapabilitySet,
    HookDescriptor,
    HookKind,
)
from lifetrace.interceptor import HookInterceptor, is_instrumented, trace
from lifetrace.panel import LogReplay, PanelRow, format_log_lines, highlight_for, panel_rows
from lifetrace.registry import IdentityRegistry, label_of
from lifetrace.session import (
    TraceSession,
    clear_instance_id_counters,
    clear_log,
    configure_default_session,
    get_default_session,
    reset_default_session,
    reset_identity,
    trace_lifecycle,
)

__all__ = [
    # Config
    "LifetraceConfig",
    "get_config",
    "reset_config",
    # Errors
    "ConfigurationError",
    "ErrorCode",
    "LifetraceError",
    "RegistryKeyCollision",
    "SchedulerUnavailableError",
    "TraceContextError",
    "UnsupportedCapabilitySet",
    "classify_error",
    # Hooks
    "LEGACY_HOOKS",
    "MODERN_HOOKS",
    "CapabilitySet",
    "HookDescriptor",
    "HookKind",
    # Log
    "AsyncioScheduler",
    "CorrelationIndex",
    "EventLog",
    "EventLogStats",
    "FlushScheduler",
    "ImmediateScheduler",
    "LogEntry",
    "ManualScheduler",
    "create_scheduler",
    # Instrumentation
    "HookInterceptor",
    "IdentityRegistry",
    "is_instrumented",
    "label_of",
    "trace",
    "trace_lifecycle",
    # Sessions
    "TraceSession",
    "clear_instance_id_counters",
    "clear_log",
    "configure_default_session",
    "get_default_session",
    "reset_default_session",
    "reset_identity",
    # Panel
    "LogReplay",
    "PanelRow",
    "format_log_lines",
    "highlight_for",
    "panel_rows",
]

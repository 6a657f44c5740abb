"""
Hook interception.

Builds instrumented subclasses that record every lifecycle hook call, and
tracks which hook is running so custom traces can be attributed to it.
"""

from lifetrace.interceptor.context import ActiveCall, active_call, current_call, trace
from lifetrace.interceptor.interceptor import HookInterceptor, is_instrumented, resolve_capability_set

__all__ = [
    "ActiveCall",
    "HookInterceptor",
    "active_call",
    "current_call",
    "is_instrumented",
    "resolve_capability_set",
    "trace",
]

"""
Structured error codes for lifetrace.

Provides semantic error classification so callers of the instrumentation
layer can route failures without matching on exception classes.

Usage:
    from lifetrace.error_codes import ErrorCode, classify_error

    try:
        session.wrap(SomeComponent)
    except Exception as e:
        if classify_error(e) == ErrorCode.CAPABILITY_UNSUPPORTED:
            ...
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Semantic error codes for categorizing lifetrace exceptions."""

    # General errors
    UNKNOWN = "UNKNOWN"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    USER_CODE_ERROR = "USER_CODE_ERROR"

    # Configuration errors
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

    # Instrumentation errors
    CAPABILITY_UNSUPPORTED = "CAPABILITY_UNSUPPORTED"
    REGISTRY_COLLISION = "REGISTRY_COLLISION"
    TRACE_CONTEXT_MISSING = "TRACE_CONTEXT_MISSING"

    # Scheduling errors
    SCHEDULER_UNAVAILABLE = "SCHEDULER_UNAVAILABLE"


def error_chain(error: BaseException) -> list[BaseException]:
    """Traverse the __cause__ chain, returning it from root to leaf.

    Args:
        error: The exception to traverse

    Returns:
        List of exceptions from the root cause to the provided exception.
    """
    chain: list[BaseException] = []
    current: BaseException | None = error

    while current is not None:
        chain.append(current)
        cause = current.__cause__
        if cause is current:
            break
        current = cause

    chain.reverse()
    return chain


def classify_error(error: BaseException) -> ErrorCode:
    """Map any exception to an ErrorCode.

    Exceptions carrying an ``error_code`` (all lifetrace exceptions) are
    classified by it. The cause chain is searched from the outermost
    exception inward, so the closest lifetrace error wins. Anything else raised
    while a hook was running is user code.

    Args:
        error: The exception to classify

    Returns:
        The most appropriate ErrorCode for the exception.
    """
    for exc in reversed(error_chain(error)):
        if hasattr(exc, "error_code"):
            return exc.error_code  # type: ignore[no-any-return]

    if isinstance(error, (TypeError, ValueError, AttributeError, KeyError)):
        return ErrorCode.USER_CODE_ERROR

    return ErrorCode.UNKNOWN

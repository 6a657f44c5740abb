"""Configuration and wrapping errors."""

from __future__ import annotations

from lifetrace.error_codes import ErrorCode
from lifetrace.errors.base import LifetraceError


class ConfigurationError(LifetraceError):
    """Invalid configuration.

    Raised when a config value or scheduler mode cannot be used, or when a
    class cannot be instrumented as asked.
    """

    code = 104
    default_error_code = ErrorCode.CONFIGURATION_INVALID


class UnsupportedCapabilitySet(ConfigurationError):
    """The target's hooks match neither the modern nor the legacy hook set.

    Raised by the interceptor before any class is built, so a failed wrap
    never yields a partially instrumented class.

    Attributes:
        target_name: Name of the class that could not be wrapped
        conflicting: Hook names that caused the rejection
    """

    code = 201
    default_error_code = ErrorCode.CAPABILITY_UNSUPPORTED

    def __init__(
        self,
        message: str,
        *,
        target_name: str = "",
        conflicting: tuple[str, ...] = (),
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.target_name = target_name
        self.conflicting = conflicting

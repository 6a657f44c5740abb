"""Base error for lifetrace.

Every error the instrumentation layer raises is a LifetraceError. Each
subclass pins a numeric ``code`` and a semantic ``ErrorCode`` at class
level, so callers can route on either without matching exception types.
"""

from __future__ import annotations

from typing import ClassVar

from lifetrace.error_codes import ErrorCode


class LifetraceError(Exception):
    """Base class for lifetrace errors.

    Attributes:
        code: Numeric error code for programmatic handling
        error_code: Semantic ErrorCode for categorization
        cause: Optional original exception that caused this error
    """

    code: int = 100
    default_error_code: ClassVar[ErrorCode] = ErrorCode.SYSTEM_ERROR

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        error_code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.error_code = error_code or self.default_error_code

    def __str__(self) -> str:
        text = f"{super().__str__()} (code={self.code})"
        if self.cause is not None:
            text += f" caused by: {self.cause}"
        return text

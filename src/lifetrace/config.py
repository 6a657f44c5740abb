"""
Configuration for lifetrace.

Provides LifetraceConfig with support for loading from environment
variables, and a lazily loaded process-wide default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from lifetrace.errors import ConfigurationError

FLUSH_MODES = ("asyncio", "manual", "sync")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class LifetraceConfig:
    """Trace session settings.

    Environment Variables:
        LIFETRACE_FLUSH_MODE: How log flushes are scheduled (default: asyncio).
            One of "asyncio", "manual", "sync".
        LIFETRACE_LOG_JSON: Emit JSON logs instead of console logs (default: false)
        LIFETRACE_LOG_LEVEL: Minimum log level name (default: INFO)
        LIFETRACE_REPLAY_INTERVAL_MS: Delay between replay highlight steps (default: 1000)
        LIFETRACE_SESSION_NAME: Name bound to session log records (default: default)

    Attributes:
        flush_mode: Scheduler used by the event log to defer flushes
        log_json: Whether configure_logging renders JSON
        log_level: Minimum level passed to configure_logging
        replay_interval_ms: Delay between steps of TraceSession.replay() cursors
        session_name: Name of the default trace session
    """

    flush_mode: str = "asyncio"
    log_json: bool = False
    log_level: str = "INFO"
    replay_interval_ms: int = 1000
    session_name: str = "default"

    @classmethod
    def from_env(cls) -> LifetraceConfig:
        """Load configuration from environment variables with defaults.

        Returns:
            LifetraceConfig with values loaded from environment or defaults

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        try:
            replay_interval_ms = int(os.getenv("LIFETRACE_REPLAY_INTERVAL_MS", "1000"))
        except ValueError as e:
            raise ConfigurationError("LIFETRACE_REPLAY_INTERVAL_MS must be an integer", cause=e) from e

        config = cls(
            flush_mode=os.getenv("LIFETRACE_FLUSH_MODE", "asyncio").strip().lower(),
            log_json=os.getenv("LIFETRACE_LOG_JSON", "false").strip().lower() in _TRUE_VALUES,
            log_level=os.getenv("LIFETRACE_LOG_LEVEL", "INFO").strip().upper(),
            replay_interval_ms=replay_interval_ms,
            session_name=os.getenv("LIFETRACE_SESSION_NAME", "default"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check that every setting is usable.

        Raises:
            ConfigurationError: On the first invalid setting
        """
        if self.flush_mode not in FLUSH_MODES:
            raise ConfigurationError(
                f"Unknown flush mode {self.flush_mode!r}, expected one of {', '.join(FLUSH_MODES)}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
        if self.replay_interval_ms <= 0:
            raise ConfigurationError("replay_interval_ms must be positive")
        if not self.session_name:
            raise ConfigurationError("session_name must not be empty")

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for configure_logging."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


# Singleton for default config (loaded lazily)
_default_config: LifetraceConfig | None = None


def get_config() -> LifetraceConfig:
    """Get the default LifetraceConfig, loading from environment on first call.

    Returns:
        The singleton LifetraceConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = LifetraceConfig.from_env()
    return _default_config


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _default_config
    _default_config = None

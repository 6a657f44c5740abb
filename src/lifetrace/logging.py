"""Structured logging for lifetrace.

This module provides structured logging using structlog, enabling:
- JSON-formatted logs for machine consumption
- Pretty console logs for development
- Automatic context binding (session, instance_label)
- Integration with standard library logging

Usage:
    from lifetrace.logging import configure_logging, get_logger

    # Configure once at application startup
    configure_logging(json_format=True)

    # Get a logger
    logger = get_logger("my.module")
    logger.info("class_instrumented", target="Child", capability_set="modern")

Context binding:
    logger = get_logger("lifetrace.session").bind(session="demo")
    logger.info("log_cleared")  # session automatically included
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from lifetrace.config import LifetraceConfig, get_config

_configured = False


def configure_logging(
    json_format: bool = False,
    level: int = logging.INFO,
    logger_factory: Any = None,
) -> None:
    """Configure structured logging for lifetrace.

    Call this once at application startup before any logging occurs.

    Args:
        json_format: If True, output JSON logs.
                    If False, output pretty console logs.
        level: Minimum log level (default: INFO)
        logger_factory: Custom logger factory (for testing)
    """
    global _configured

    # Configure stdlib logging (structlog wraps it)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory or structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def configure_from_config(config: LifetraceConfig | None = None) -> None:
    """Configure logging from LIFETRACE_LOG_JSON and LIFETRACE_LOG_LEVEL.

    Args:
        config: Settings to use. Loaded from the environment when None.
    """
    config = config or get_config()
    configure_logging(json_format=config.log_json, level=config.log_level_number)


def get_logger(name: str) -> Any:
    """Get a structured logger for the given name.

    The first call configures logging from the environment unless
    configure_logging was called already.

    Args:
        name: Logger name (typically __name__ or module path)

    Returns:
        A bound logger that supports structured logging.
    """
    if not _configured:
        configure_from_config()

    return structlog.get_logger(name)


def session_logger(session_name: str) -> Any:
    """Get a logger pre-bound with trace session context.

    Args:
        session_name: Name of the trace session

    Returns:
        Logger with session bound
    """
    return get_logger("lifetrace.session").bind(session=session_name)


def instance_logger(session_name: str, instance_label: str) -> Any:
    """Get a logger pre-bound with instrumented instance context.

    Args:
        session_name: Name of the trace session
        instance_label: Label of the instrumented instance (e.g. "Child-1")

    Returns:
        Logger with session and instance_label bound
    """
    return get_logger("lifetrace.instance").bind(
        session=session_name,
        instance_label=instance_label,
    )

"""lifetrace error hierarchy.

All error classes are re-exported here. Import from ``lifetrace.errors``.
"""

from lifetrace.errors.base import LifetraceError
from lifetrace.errors.configuration import ConfigurationError, UnsupportedCapabilitySet
from lifetrace.errors.runtime import (
    RegistryKeyCollision,
    SchedulerUnavailableError,
    TraceContextError,
)

__all__ = [
    "ConfigurationError",
    "LifetraceError",
    "RegistryKeyCollision",
    "SchedulerUnavailableError",
    "TraceContextError",
    "UnsupportedCapabilitySet",
]

"""
Log entry model.

A log entry is an immutable record of one hook call, or of a custom trace
emitted by the traced object's own code while a hook was running.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any


def _generate_entry_id() -> str:
    """Generate a unique entry ID using ULID."""
    from ulid import ULID

    return str(ULID())


def _utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class LogEntry:
    """
    Immutable hook log record.

    Attributes:
        sequence: Global call order, assigned by the EventLog on append.
        instance_label: Label of the instance the call belongs to ("Child-1").
        hook_name: Hook the entry belongs to. For custom traces this is the
            hook that was running when the trace was emitted, or None.
        message: Text shown in the log ("render", "setState:callback",
            "custom:render").
        is_custom_trace: True when emitted by the traced object's own code.
        entry_id: Unique identifier (ULID).
        timestamp: When the entry was appended (UTC).
    """

    sequence: int = 0
    instance_label: str = ""
    hook_name: str | None = None
    message: str = ""
    is_custom_trace: bool = False
    entry_id: str = field(default_factory=_generate_entry_id)
    timestamp: datetime = field(default_factory=_utc_now)

    def with_sequence(self, sequence: int) -> LogEntry:
        """Return a new entry with the given sequence number."""
        return replace(self, sequence=sequence)

    def format(self, position: int) -> str:
        """Render the entry as a log line, e.g. `` 3 Child-1: render``."""
        return f"{position:>2} {self.instance_label}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            "entry_id": self.entry_id,
            "sequence": self.sequence,
            "instance_label": self.instance_label,
            "hook_name": self.hook_name,
            "message": self.message,
            "is_custom_trace": self.is_custom_trace,
            "timestamp": self.timestamp.isoformat(),
        }

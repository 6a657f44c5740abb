"""
Correlation between log entries and the hooks they came from.

The index is a read model kept up to date from the event log's flushes.
It answers "which panel row does this entry belong to", "how often has this
hook fired on this instance" and "does this class implement this hook".
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any

from lifetrace.events.base import LogEntry
from lifetrace.events.log import EventLog
from lifetrace.hooks.descriptors import CAPABILITY_SETS, defines_hook

# Log text of the entry a hook records for itself, by hook name
_HOOK_LABELS = {hook.name: hook.label for capability_set in CAPABILITY_SETS for hook in capability_set}


def _is_own_entry(entry: LogEntry) -> bool:
    return not entry.is_custom_trace and entry.message == _HOOK_LABELS.get(entry.hook_name or "")


class CorrelationIndex:
    """
    Read-only view over the visible log, indexed by (instance, hook).

    Only flushed entries are indexed, so the index always agrees with
    ``EventLog.snapshot()``.
    """

    def __init__(self, log: EventLog) -> None:
        """
        Build the index and start following the log.

        Args:
            log: The log to index.
        """
        self._log = log
        self._lock = threading.Lock()
        self._by_method: dict[tuple[str, str], list[LogEntry]] = defaultdict(list)
        self._instances: dict[str, None] = {}
        self._subscription_id = f"correlation-{id(self)}"
        self.rebuild()
        log.subscribe(self._subscription_id, self._on_flush)

    def _on_flush(self, batch: tuple[LogEntry, ...]) -> None:
        if not batch:
            # An empty batch means the log was cleared
            self.reset()
            return
        for entry in batch:
            self.apply(entry)

    def apply(self, entry: LogEntry) -> None:
        """Index one entry."""
        with self._lock:
            self._instances.setdefault(entry.instance_label, None)
            if entry.hook_name is not None:
                self._by_method[(entry.instance_label, entry.hook_name)].append(entry)

    def reset(self) -> None:
        """Forget everything indexed so far."""
        with self._lock:
            self._by_method.clear()
            self._instances.clear()

    def rebuild(self) -> None:
        """Re-index the log's current snapshot from scratch."""
        self.reset()
        for entry in self._log.snapshot():
            self.apply(entry)

    def close(self) -> None:
        """Stop following the log."""
        self._log.unsubscribe(self._subscription_id)

    @staticmethod
    def method_for_entry(entry: LogEntry) -> str | None:
        """The hook an entry belongs to, used as the panel highlight key."""
        return entry.hook_name

    def entries_for_method(self, instance_label: str, hook_name: str) -> tuple[LogEntry, ...]:
        """
        All visible entries for an instance/hook pair, in sequence order.

        Includes state-update sub-events and custom traces emitted while
        the hook was running.
        """
        with self._lock:
            return tuple(self._by_method.get((instance_label, hook_name), ()))

    def fire_count(self, instance_label: str, hook_name: str) -> int:
        """How many times the hook itself was recorded for the instance."""
        with self._lock:
            entries = self._by_method.get((instance_label, hook_name), ())
            return sum(1 for e in entries if _is_own_entry(e))

    def instances(self) -> list[str]:
        """Instance labels in the order they first appear in the log."""
        with self._lock:
            return list(self._instances)

    @staticmethod
    def is_implemented(target_class: type, hook_name: str) -> bool:
        """
        Whether the traced class itself defines a hook.

        Defaults synthesized by the interceptor do not count. Accepts either
        the original class or the instrumented one.
        """
        original = getattr(target_class, "__lifetrace_target__", target_class)
        capabilities = getattr(target_class, "__lifetrace_capabilities__", None)
        sets = (capabilities,) if capabilities is not None else CAPABILITY_SETS
        for capability_set in sets:
            hook = capability_set.get(hook_name)
            if hook is not None:
                return defines_hook(original, hook)
        return False

    def get_state(self) -> dict[str, Any]:
        """Fire counts per instance and hook."""
        with self._lock:
            state: dict[str, dict[str, int]] = {}
            for (label, hook_name), entries in self._by_method.items():
                state.setdefault(label, {})[hook_name] = sum(1 for e in entries if _is_own_entry(e))
            return state

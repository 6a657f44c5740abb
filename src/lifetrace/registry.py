"""
Per-class instance identity registry.

Hands out labels of the form "<ClassName>-<n>", counting from 1 for each
class name until the registry is reset.
"""

from __future__ import annotations

import threading

from lifetrace.errors import RegistryKeyCollision

# Attribute the claimed label is stored under on instrumented instances
LABEL_ATTRIBUTE = "_lifetrace_label"


class IdentityRegistry:
    """
    Thread-safe label counter keyed by class display name.

    The registry never touches the event log; clearing one leaves the
    other intact.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def next_label(self, class_name: str) -> str:
        """Return the next label for ``class_name`` and advance its counter."""
        with self._lock:
            n = self._counters.get(class_name, 0) + 1
            self._counters[class_name] = n
        return f"{class_name}-{n}"

    def peek(self, class_name: str) -> int:
        """The sequence number the next label for ``class_name`` will carry."""
        with self._lock:
            return self._counters.get(class_name, 0) + 1

    def reset(self) -> None:
        """Start every class name over at 1."""
        with self._lock:
            self._counters.clear()

    def claim(self, instance: object, class_name: str) -> str:
        """
        Label a freshly constructed instance.

        Args:
            instance: The instrumented instance.
            class_name: Display name the label is built from.

        Returns:
            The label now stored on the instance.

        Raises:
            RegistryKeyCollision: If the instance already carries a label.
        """
        existing = getattr(instance, LABEL_ATTRIBUTE, None)
        if existing is not None:
            raise RegistryKeyCollision(
                f"Instance already labeled {existing!r}",
                existing_label=existing,
                new_label=f"{class_name}-{self.peek(class_name)}",
            )
        label = self.next_label(class_name)
        object.__setattr__(instance, LABEL_ATTRIBUTE, label)
        return label

    def counters(self) -> dict[str, int]:
        """Copy of the current counters (last label number issued per class)."""
        with self._lock:
            return dict(self._counters)


def label_of(instance: object) -> str | None:
    """The label an instance was claimed with, if any."""
    return getattr(instance, LABEL_ATTRIBUTE, None)

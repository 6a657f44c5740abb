"""
Minimal host runtime for the tests.

Drives component-style objects through mount, prop updates, state updates
and unmount, calling their hooks in the order React 16.3 does. lifetrace
only observes these calls; nothing in the package depends on this module.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

State = dict[str, Any]
Updater = State | Callable[[State, dict[str, Any]], State | None] | None


class Component:
    """Base class for hosted components."""

    def __init__(self, props: dict[str, Any], context: Any = None) -> None:
        self.props = props
        self.context = context
        self.state: State = {}
        self.host: Host | None = None

    def set_state(self, updater: Updater, callback: Callable[[], Any] | None = None) -> None:
        if self.host is None:
            raise RuntimeError("set_state called on an unmounted component")
        self.host.enqueue_state_update(self, updater, callback)

    def trace(self, message: str) -> None:
        """Replaced on instrumented classes."""


class Host:
    """Runs lifecycle hooks synchronously, like an unbatched React update."""

    def __init__(self) -> None:
        self.mounted: list[Any] = []
        self.rendered: dict[int, Any] = {}

    def _hook(self, instance: Any, attribute: str) -> Callable[..., Any] | None:
        return getattr(instance, attribute, None)  # type: ignore[no-any-return]

    def mount(self, component_class: type, props: dict[str, Any] | None = None) -> Any:
        props = props or {}
        instance = component_class(props)
        instance.host = self

        derive = self._hook(instance, "get_derived_state_from_props")
        if derive is not None:
            partial = derive(props, instance.state)
            if partial:
                instance.state = {**instance.state, **partial}

        will_mount = self._hook(instance, "component_will_mount")
        if will_mount is not None:
            will_mount()

        self.rendered[id(instance)] = instance.render()

        did_mount = self._hook(instance, "component_did_mount")
        if did_mount is not None:
            did_mount()

        self.mounted.append(instance)
        return instance

    def update_props(self, instance: Any, props: dict[str, Any]) -> None:
        will_receive = self._hook(instance, "component_will_receive_props")
        if will_receive is not None:
            will_receive(props)

        next_state = instance.state
        derive = self._hook(instance, "get_derived_state_from_props")
        if derive is not None:
            partial = derive(props, instance.state)
            if partial:
                next_state = {**next_state, **partial}

        self._update(instance, props, next_state, [])

    def enqueue_state_update(
        self,
        instance: Any,
        updater: Updater,
        callback: Callable[[], Any] | None,
    ) -> None:
        partial = updater(instance.state, instance.props) if callable(updater) else updater
        next_state = {**instance.state, **(partial or {})}
        self._update(instance, instance.props, next_state, [callback] if callback else [])

    def _update(
        self,
        instance: Any,
        next_props: dict[str, Any],
        next_state: State,
        callbacks: list[Callable[[], Any]],
    ) -> None:
        should_update = self._hook(instance, "should_component_update")
        if should_update is not None and not should_update(next_props, next_state):
            instance.props, instance.state = next_props, next_state
            for callback in callbacks:
                callback()
            return

        will_update = self._hook(instance, "component_will_update")
        if will_update is not None:
            will_update(next_props, next_state)

        prev_props, prev_state = instance.props, instance.state
        instance.props, instance.state = next_props, next_state
        self.rendered[id(instance)] = instance.render()

        snapshot = None
        get_snapshot = self._hook(instance, "get_snapshot_before_update")
        if get_snapshot is not None:
            snapshot = get_snapshot(prev_props, prev_state)

        did_update = self._hook(instance, "component_did_update")
        if did_update is not None:
            did_update(prev_props, prev_state, snapshot)

        for callback in callbacks:
            callback()

    def unmount(self, instance: Any) -> None:
        will_unmount = self._hook(instance, "component_will_unmount")
        if will_unmount is not None:
            will_unmount()
        self.mounted.remove(instance)
        self.rendered.pop(id(instance), None)
        instance.host = None

    def unmount_all(self) -> None:
        for instance in list(self.mounted):
            self.unmount(instance)

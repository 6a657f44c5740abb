"""Components used by the tests, one per hook set."""

from __future__ import annotations

from typing import Any

from lifetrace import trace
from tests.host import Component


class Child(Component):
    """Implements every modern hook and traces from inside each one."""

    def __init__(self, props: dict[str, Any], context: Any = None) -> None:
        super().__init__(props, context)
        self.state = {"counter": 0}

    @staticmethod
    def get_derived_state_from_props(props: dict[str, Any], state: dict[str, Any]) -> dict[str, Any] | None:
        trace("custom:getDerivedStateFromProps")
        return None

    def should_component_update(self, next_props: dict[str, Any], next_state: dict[str, Any]) -> bool:
        self.trace("custom:shouldComponentUpdate")
        return True

    def render(self) -> str:
        self.trace("custom:render")
        return f"<Child counter={self.state['counter']}/>"

    def get_snapshot_before_update(self, prev_props: dict[str, Any], prev_state: dict[str, Any]) -> Any:
        self.trace("custom:getSnapshotBeforeUpdate")
        return None

    def component_did_mount(self) -> None:
        self.trace("custom:componentDidMount")

    def component_did_update(self, prev_props: dict[str, Any], prev_state: dict[str, Any], snapshot: Any) -> None:
        self.trace("custom:componentDidUpdate")

    def component_will_unmount(self) -> None:
        self.trace("custom:componentWillUnmount")

    def update_state(self) -> None:
        def increment(state: dict[str, Any], props: dict[str, Any]) -> dict[str, Any]:
            self.trace("custom:setState update fn")
            return {"counter": state["counter"] + 1}

        def done() -> None:
            self.trace("custom:setState callback")

        self.set_state(increment, done)


class LegacyChild(Component):
    """Implements every legacy hook and traces from inside each one."""

    def __init__(self, props: dict[str, Any], context: Any = None) -> None:
        super().__init__(props, context)

    def component_will_mount(self) -> None:
        self.trace("custom:componentWillMount")

    def component_will_receive_props(self, next_props: dict[str, Any]) -> None:
        self.trace("custom:componentWillReceiveProps")

    def should_component_update(self, next_props: dict[str, Any], next_state: dict[str, Any]) -> bool:
        self.trace("custom:shouldComponentUpdate")
        return True

    def component_will_update(self, next_props: dict[str, Any], next_state: dict[str, Any]) -> None:
        self.trace("custom:componentWillUpdate")

    def render(self) -> str:
        self.trace("custom:render")
        return "<LegacyChild/>"

    def component_did_mount(self) -> None:
        self.trace("custom:componentDidMount")

    def component_did_update(self, prev_props: dict[str, Any], prev_state: dict[str, Any], snapshot: Any) -> None:
        self.trace("custom:componentDidUpdate")

    def component_will_unmount(self) -> None:
        self.trace("custom:componentWillUnmount")

    def update_state(self) -> None:
        def noop(state: dict[str, Any], props: dict[str, Any]) -> dict[str, Any]:
            self.trace("custom:setState update fn")
            return {}

        self.set_state(noop, lambda: self.trace("custom:setState callback"))


class X(Component):
    """Only renders."""

    def render(self) -> str:
        return "<X/>"

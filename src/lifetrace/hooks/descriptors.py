"""
Hook descriptors and the two supported capability sets.

A capability set is the fixed, ordered list of lifecycle hooks a traced
class may implement. The order is the order panel rows are shown in.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class HookKind(Enum):
    """How the interceptor has to wrap a hook."""

    CONSTRUCTOR = "constructor"
    METHOD = "method"
    STATIC = "static"
    STATE_UPDATE = "state_update"


@dataclass(frozen=True)
class HookDescriptor:
    """
    A single lifecycle hook.

    Attributes:
        name: Canonical hook name, used for panel rows and correlation.
        attribute: Attribute the hook lives under on the traced class.
        label: Text written to the log when the hook fires.
        kind: How the hook is wrapped.
        always_fires: Synthesize a recording default when the class lacks it.
        default: Return value of the synthesized default.
    """

    name: str
    attribute: str
    label: str
    kind: HookKind = HookKind.METHOD
    always_fires: bool = False
    default: Any = None


# Sub-event labels recorded for state updates
SET_STATE_UPDATE_FN = "setState:update fn"
SET_STATE_CALLBACK = "setState:callback"

CONSTRUCTOR = HookDescriptor("constructor", "__init__", "constructor", HookKind.CONSTRUCTOR, always_fires=True)
GET_DERIVED_STATE_FROM_PROPS = HookDescriptor(
    "getDerivedStateFromProps",
    "get_derived_state_from_props",
    "static getDerivedStateFromProps",
    HookKind.STATIC,
)
COMPONENT_WILL_MOUNT = HookDescriptor("componentWillMount", "component_will_mount", "componentWillMount")
COMPONENT_WILL_RECEIVE_PROPS = HookDescriptor(
    "componentWillReceiveProps",
    "component_will_receive_props",
    "componentWillReceiveProps",
)
SHOULD_COMPONENT_UPDATE = HookDescriptor(
    "shouldComponentUpdate",
    "should_component_update",
    "shouldComponentUpdate",
    always_fires=True,
    default=True,
)
COMPONENT_WILL_UPDATE = HookDescriptor("componentWillUpdate", "component_will_update", "componentWillUpdate")
RENDER = HookDescriptor("render", "render", "render")
GET_SNAPSHOT_BEFORE_UPDATE = HookDescriptor(
    "getSnapshotBeforeUpdate",
    "get_snapshot_before_update",
    "getSnapshotBeforeUpdate",
)
COMPONENT_DID_MOUNT = HookDescriptor("componentDidMount", "component_did_mount", "componentDidMount", always_fires=True)
COMPONENT_DID_UPDATE = HookDescriptor(
    "componentDidUpdate",
    "component_did_update",
    "componentDidUpdate",
    always_fires=True,
)
COMPONENT_WILL_UNMOUNT = HookDescriptor(
    "componentWillUnmount",
    "component_will_unmount",
    "componentWillUnmount",
    always_fires=True,
)
# Wrapped only when the class or one of its bases provides it
SET_STATE = HookDescriptor("setState", "set_state", "setState", HookKind.STATE_UPDATE)


@dataclass(frozen=True)
class CapabilitySet:
    """
    An ordered, immutable set of hook descriptors.

    Attributes:
        name: "modern" or "legacy".
        hooks: Descriptors in panel order.
        exclusive: Hook names that only this set contains.
    """

    name: str
    hooks: tuple[HookDescriptor, ...]
    exclusive: frozenset[str] = frozenset()

    def __iter__(self) -> Iterator[HookDescriptor]:
        return iter(self.hooks)

    def __len__(self) -> int:
        return len(self.hooks)

    def __contains__(self, hook_name: object) -> bool:
        return any(h.name == hook_name for h in self.hooks)

    @property
    def names(self) -> tuple[str, ...]:
        """Hook names in panel order."""
        return tuple(h.name for h in self.hooks)

    def get(self, hook_name: str) -> HookDescriptor | None:
        """Look up a descriptor by hook name."""
        for hook in self.hooks:
            if hook.name == hook_name:
                return hook
        return None

    def position(self, hook_name: str) -> int:
        """Panel row index of a hook, or -1 when the set lacks it."""
        for i, hook in enumerate(self.hooks):
            if hook.name == hook_name:
                return i
        return -1


MODERN_HOOKS = CapabilitySet(
    name="modern",
    hooks=(
        CONSTRUCTOR,
        GET_DERIVED_STATE_FROM_PROPS,
        SHOULD_COMPONENT_UPDATE,
        RENDER,
        GET_SNAPSHOT_BEFORE_UPDATE,
        COMPONENT_DID_MOUNT,
        COMPONENT_DID_UPDATE,
        COMPONENT_WILL_UNMOUNT,
        SET_STATE,
    ),
    exclusive=frozenset({"getDerivedStateFromProps", "getSnapshotBeforeUpdate"}),
)

LEGACY_HOOKS = CapabilitySet(
    name="legacy",
    hooks=(
        CONSTRUCTOR,
        COMPONENT_WILL_MOUNT,
        COMPONENT_WILL_RECEIVE_PROPS,
        SHOULD_COMPONENT_UPDATE,
        COMPONENT_WILL_UPDATE,
        RENDER,
        COMPONENT_DID_MOUNT,
        COMPONENT_DID_UPDATE,
        COMPONENT_WILL_UNMOUNT,
        SET_STATE,
    ),
    exclusive=frozenset({"componentWillMount", "componentWillReceiveProps", "componentWillUpdate"}),
)

CAPABILITY_SETS: tuple[CapabilitySet, ...] = (MODERN_HOOKS, LEGACY_HOOKS)


def defines_hook(target_class: type, hook: HookDescriptor) -> bool:
    """Whether ``target_class`` itself provides ``hook``.

    The constructor counts as defined when any class below ``object`` in the
    MRO declares ``__init__``.
    """
    if hook.kind is HookKind.CONSTRUCTOR:
        return any("__init__" in vars(klass) for klass in target_class.__mro__ if klass is not object)
    return getattr(target_class, hook.attribute, None) is not None

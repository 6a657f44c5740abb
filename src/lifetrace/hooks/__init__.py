"""Lifecycle hook descriptors."""

from lifetrace.hooks.descriptors import (
    CAPABILITY_SETS,
    LEGACY_HOOKS,
    MODERN_HOOKS,
    SET_STATE_CALLBACK,
    SET_STATE_UPDATE_FN,
    CapabilitySet,
    HookDescriptor,
    HookKind,
    defines_hook,
)

__all__ = [
    "CAPABILITY_SETS",
    "LEGACY_HOOKS",
    "MODERN_HOOKS",
    "SET_STATE_CALLBACK",
    "SET_STATE_UPDATE_FN",
    "CapabilitySet",
    "HookDescriptor",
    "HookKind",
    "defines_hook",
]

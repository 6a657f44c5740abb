"""
HookInterceptor - builds instrumented subclasses of traced classes.

The instrumented class is a subclass of the original with the same name,
module and docstring. It accepts the same constructor arguments and returns
the same values from every hook; the only difference is the log it writes.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from lifetrace.errors import ConfigurationError, UnsupportedCapabilitySet
from lifetrace.events.base import LogEntry
from lifetrace.events.log import EventLog
from lifetrace.hooks.descriptors import (
    CAPABILITY_SETS,
    LEGACY_HOOKS,
    MODERN_HOOKS,
    CapabilitySet,
    HookKind,
    defines_hook,
)
from lifetrace.interceptor.context import current_call_for
from lifetrace.interceptor.wrappers import (
    StaticHook,
    constructor_wrapper,
    default_wrapper,
    method_wrapper,
    state_update_wrapper,
)
from lifetrace.registry import IdentityRegistry, label_of

logger = logging.getLogger(__name__)


def _exclusive_defined(target_class: type, capability_set: CapabilitySet) -> tuple[str, ...]:
    """Names of hooks only ``capability_set`` has that the class defines."""
    return tuple(
        hook.name
        for hook in capability_set
        if hook.name in capability_set.exclusive and defines_hook(target_class, hook)
    )


def resolve_capability_set(
    target_class: type,
    capability_set: CapabilitySet | str | None = None,
) -> CapabilitySet:
    """
    Decide which hook set a class implements.

    Args:
        target_class: The class about to be wrapped.
        capability_set: MODERN_HOOKS, LEGACY_HOOKS, their names, or None to
            detect from the hooks the class defines.

    Returns:
        The capability set to wrap with.

    Raises:
        UnsupportedCapabilitySet: If the class lacks ``render``, mixes hooks
            exclusive to both sets, contradicts the requested set, or the
            requested set is not one of the two known sets.
    """
    name = target_class.__name__

    if isinstance(capability_set, str):
        by_name = {s.name: s for s in CAPABILITY_SETS}
        if capability_set not in by_name:
            raise UnsupportedCapabilitySet(
                f"Unknown capability set {capability_set!r} for {name}",
                target_name=name,
            )
        capability_set = by_name[capability_set]
    elif capability_set is not None and not any(capability_set is s for s in CAPABILITY_SETS):
        raise UnsupportedCapabilitySet(
            f"{name} can only be wrapped with the modern or legacy hook set",
            target_name=name,
        )

    if getattr(target_class, "render", None) is None:
        raise UnsupportedCapabilitySet(f"{name} does not define render", target_name=name, conflicting=("render",))

    modern = _exclusive_defined(target_class, MODERN_HOOKS)
    legacy = _exclusive_defined(target_class, LEGACY_HOOKS)
    if modern and legacy:
        raise UnsupportedCapabilitySet(
            f"{name} mixes modern hooks {list(modern)} with legacy hooks {list(legacy)}",
            target_name=name,
            conflicting=modern + legacy,
        )

    if capability_set is None:
        return LEGACY_HOOKS if legacy else MODERN_HOOKS

    foreign = legacy if capability_set is MODERN_HOOKS else modern
    if foreign:
        raise UnsupportedCapabilitySet(
            f"{name} was wrapped as {capability_set.name} but defines {list(foreign)}",
            target_name=name,
            conflicting=foreign,
        )
    return capability_set


class HookInterceptor:
    """
    Wraps traced classes so every lifecycle hook call lands in an EventLog.

    Labels come from the IdentityRegistry when an instance is constructed.
    The interceptor never calls hooks itself; it only observes calls the
    host makes.
    """

    def __init__(self, registry: IdentityRegistry, log: EventLog, session_name: str = "default") -> None:
        """
        Initialize the interceptor.

        Args:
            registry: Hands out instance labels.
            log: Receives one entry per hook call.
            session_name: Bound to structured log records.
        """
        self._registry = registry
        self._log = log
        self._session_name = session_name

    def wrap(
        self,
        target_class: type,
        capability_set: CapabilitySet | str | None = None,
        display_name: str | None = None,
    ) -> type:
        """
        Build the instrumented version of ``target_class``.

        Args:
            target_class: Class exposing lifecycle hooks.
            capability_set: Hook set to wrap with; detected when None.
            display_name: Name used in instance labels. Defaults to the class name.

        Returns:
            A subclass of ``target_class`` recording every hook call.

        Raises:
            UnsupportedCapabilitySet: If the class fits neither hook set.
            ConfigurationError: If the class or one of its bases is already
                instrumented.
        """
        instrumented_base = next((k for k in target_class.__mro__ if is_instrumented(k)), None)
        if instrumented_base is target_class:
            raise ConfigurationError(f"{target_class.__name__} is already instrumented")
        if instrumented_base is not None:
            raise ConfigurationError(
                f"{target_class.__name__} inherits from instrumented {instrumented_base.__name__}; "
                "wrap the uninstrumented base instead"
            )

        resolved = resolve_capability_set(target_class, capability_set)
        class_name = display_name or target_class.__name__
        log = self._log
        registry = self._registry

        def claim_label(instance: Any) -> str:
            return registry.claim(instance, class_name)

        def get_label(instance: Any) -> str:
            label = label_of(instance)
            if label is None:
                # Hook called on an instance whose constructor never ran
                label = registry.claim(instance, class_name)
            return label

        def trace(instance: Any, message: str) -> LogEntry:
            """Record a custom trace attributed to the hook currently running."""
            label = get_label(instance)
            call = current_call_for(log, label)
            return log.append(label, call.hook_name if call else None, message, is_custom_trace=True)

        implemented = frozenset(hook.name for hook in resolved if defines_hook(target_class, hook))
        namespace: dict[str, Any] = {
            "__module__": target_class.__module__,
            "__qualname__": target_class.__qualname__,
            "__doc__": target_class.__doc__,
            "__lifetrace_target__": target_class,
            "__lifetrace_capabilities__": resolved,
            "__lifetrace_implemented__": implemented,
            "__lifetrace_display_name__": class_name,
            "trace": trace,
        }

        for hook in resolved:
            if hook.kind is HookKind.CONSTRUCTOR:
                namespace[hook.attribute] = constructor_wrapper(
                    target_class, hook, log, claim_label, self._session_name
                )
                continue

            if hook.name not in implemented:
                if hook.always_fires:
                    namespace[hook.attribute] = default_wrapper(hook, log, get_label)
                continue

            raw = inspect.getattr_static(target_class, hook.attribute)
            if hook.kind is HookKind.STATIC:
                namespace[hook.attribute] = StaticHook(raw, hook, log, get_label, self._session_name)
            elif hook.kind is HookKind.STATE_UPDATE:
                namespace[hook.attribute] = state_update_wrapper(raw, hook, log, get_label, self._session_name)
            else:
                namespace[hook.attribute] = method_wrapper(raw, hook, log, get_label, self._session_name)

        instrumented = type(target_class)(target_class.__name__, (target_class,), namespace)
        logger.debug(
            "Instrumented %s with %s hooks (%d implemented)",
            target_class.__qualname__,
            resolved.name,
            len(implemented),
        )
        return instrumented


def is_instrumented(cls: type) -> bool:
    """Whether ``cls`` was produced by a HookInterceptor."""
    return "__lifetrace_target__" in vars(cls)

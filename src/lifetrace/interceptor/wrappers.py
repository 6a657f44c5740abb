"""
Replacement hook implementations.

Each factory returns the attribute the instrumented class gets in place of
the original hook. Every replacement records its entry first and then
calls the original with the exact arguments it was given.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from lifetrace.events.log import EventLog
from lifetrace.hooks.descriptors import SET_STATE_CALLBACK, SET_STATE_UPDATE_FN, HookDescriptor
from lifetrace.interceptor.context import ActiveCall, active_call
from lifetrace.logging import instance_logger

LabelGetter = Callable[[Any], str]


def _bind(raw: Any, instance: Any, owner: type) -> Callable[..., Any]:
    """Resolve a raw class attribute the way normal attribute access would."""
    getter = getattr(raw, "__get__", None)
    if getter is None:
        return raw  # type: ignore[no-any-return]
    return getter(instance, owner)  # type: ignore[no-any-return]


def _call_recorded(
    log: EventLog,
    label: str,
    hook: HookDescriptor,
    message: str,
    session_name: str,
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Any:
    log.append(label, hook.name, message)
    with active_call(ActiveCall(log, label, hook.name)):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            instance_logger(session_name, label).warning("hook_raised", hook=hook.name, error=repr(e))
            raise


def constructor_wrapper(
    target: type,
    hook: HookDescriptor,
    log: EventLog,
    claim_label: LabelGetter,
    session_name: str,
) -> Callable[..., None]:
    """Claim a label, record the constructor, then run the original __init__."""
    original_init = target.__init__

    @functools.wraps(original_init)
    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        label = claim_label(self)
        _call_recorded(log, label, hook, hook.label, session_name, original_init, self, *args, **kwargs)

    return __init__


def method_wrapper(
    raw: Any,
    hook: HookDescriptor,
    log: EventLog,
    get_label: LabelGetter,
    session_name: str,
) -> Callable[..., Any]:
    """Record the hook, then delegate to the original method."""

    def traced(self: Any, *args: Any, **kwargs: Any) -> Any:
        bound = _bind(raw, self, type(self))
        return _call_recorded(log, get_label(self), hook, hook.label, session_name, bound, *args, **kwargs)

    traced.__name__ = hook.attribute
    traced.__doc__ = getattr(raw, "__doc__", None)
    traced.__wrapped__ = raw  # type: ignore[attr-defined]
    return traced


def default_wrapper(hook: HookDescriptor, log: EventLog, get_label: LabelGetter) -> Callable[..., Any]:
    """Stand-in for an always-firing hook the class does not define."""
    default = hook.default

    def synthesized(self: Any, *args: Any, **kwargs: Any) -> Any:
        label = get_label(self)
        log.append(label, hook.name, hook.label)
        return default

    synthesized.__name__ = hook.attribute
    return synthesized


class StaticHook:
    """
    Descriptor for static hooks such as getDerivedStateFromProps.

    Looked up on an instance it records against that instance; looked up on
    the class it behaves exactly like the original attribute.
    """

    def __init__(
        self,
        raw: Any,
        hook: HookDescriptor,
        log: EventLog,
        get_label: LabelGetter,
        session_name: str,
    ) -> None:
        self._raw = raw
        self._hook = hook
        self._log = log
        self._get_label = get_label
        self._session_name = session_name
        self.__wrapped__ = raw

    def __get__(self, instance: Any, owner: type | None = None) -> Callable[..., Any]:
        owner = owner if owner is not None else type(instance)
        func = _bind(self._raw, None, owner)
        if instance is None:
            return func

        @functools.wraps(func)
        def traced(*args: Any, **kwargs: Any) -> Any:
            label = self._get_label(instance)
            hook = self._hook
            return _call_recorded(self._log, label, hook, hook.label, self._session_name, func, *args, **kwargs)

        return traced


def state_update_wrapper(
    raw: Any,
    hook: HookDescriptor,
    log: EventLog,
    get_label: LabelGetter,
    session_name: str,
) -> Callable[..., Any]:
    """
    Record a state update request and trace its resolver and callback.

    The resolver is the first argument (or ``updater=``) when callable; the
    completion callback is the second argument (or ``callback=``). Each is
    replaced by a function that records its own sub-event whenever the host
    gets around to running it.
    """

    def traced(self: Any, *args: Any, **kwargs: Any) -> Any:
        label = get_label(self)

        def sub_event(fn: Callable[..., Any], message: str) -> Callable[..., Any]:
            @functools.wraps(fn)
            def traced_step(*step_args: Any, **step_kwargs: Any) -> Any:
                return _call_recorded(log, label, hook, message, session_name, fn, *step_args, **step_kwargs)

            return traced_step

        call_args = list(args)
        if call_args and callable(call_args[0]):
            call_args[0] = sub_event(call_args[0], SET_STATE_UPDATE_FN)
        elif callable(kwargs.get("updater")):
            kwargs["updater"] = sub_event(kwargs["updater"], SET_STATE_UPDATE_FN)

        if len(call_args) > 1 and callable(call_args[1]):
            call_args[1] = sub_event(call_args[1], SET_STATE_CALLBACK)
        elif callable(kwargs.get("callback")):
            kwargs["callback"] = sub_event(kwargs["callback"], SET_STATE_CALLBACK)

        bound = _bind(raw, self, type(self))
        return _call_recorded(log, label, hook, hook.label, session_name, bound, *call_args, **kwargs)

    traced.__name__ = hook.attribute
    traced.__doc__ = getattr(raw, "__doc__", None)
    traced.__wrapped__ = raw  # type: ignore[attr-defined]
    return traced

"""Event emitter: registration, wiring and synchronous dispatch of hooks.

An emitter keeps two registries of events keyed by hook name. The instance
registry is the one used by fire() and off(). The class registry holds events
declared on a class before any instance exists; they are replayed into the
instance registry when an emitter is constructed.

Callbacks are called synchronously; exceptions bubble up normally and abort
the rest of the dispatch.
"""

from __future__ import annotations

import copy
import logging
import types
from typing import Any

from hookwire.constants import HOOKS_ATTRIBUTE
from hookwire.lib.event import Event, EventCallback, OnceCallback

Events = dict[str, list[Event]]

INSTANCE_EVENTS = "_instance_events"
CLASS_EVENTS = "_class_events"


def _registry(target: Any, attribute: str) -> Events:
    """Get a registry from the target's own namespace, creating it if missing.

    Inherited registries are ignored so that a subclass never writes into the
    registry of its base class.
    """
    registry = vars(target).get(attribute)
    if registry is None:
        registry = {}
        setattr(target, attribute, registry)
    return registry


def _register_event(target: Any, event: Event, class_scoped: bool = False) -> None:
    if isinstance(target, type) and not class_scoped:
        raise TypeError(
            f"Cannot register an instance listener on class {target.__name__}, "
            "use class_scoped=True or register on an instance"
        )
    registry = _registry(target, CLASS_EVENTS if class_scoped else INSTANCE_EVENTS)
    registry.setdefault(event.name, []).append(event)


def _copy_params(params: Any) -> Any:
    """Shallow copy params; objects that cannot be copied are passed as they are."""
    if params is None:
        return {}
    try:
        return copy.copy(params)
    except (TypeError, copy.Error):
        return params


def add_listener(
    hook: str, callback: EventCallback, target: Any, class_scoped: bool = False
) -> Any:
    """Register callback for hook on target.

    Args:
        hook: The hook name.
        callback: Called with the fired params.
        target: An emitter, or an emitter class when class_scoped is True.
        class_scoped: Store the event in the class registry instead of the instance one.

    Returns:
        The target, for chaining.
    """
    event = Event(name=hook, callback=callback, source=target, params={})
    _register_event(target, event, class_scoped)
    logging.debug(f"Registered listener for '{hook}' on {target!r} (class_scoped={class_scoped})")
    return target


def add_one_time_listener(
    hook: str, callback: EventCallback, target: Any, class_scoped: bool = False
) -> Any:
    """Register callback for hook on target; the event is removed after its first call."""
    return add_listener(hook, OnceCallback(hook, callback), target, class_scoped)


def _invoke_listeners(emitter: EventEmitter, hook: str, params: Any) -> int:
    """Invoke the instance listeners of emitter for hook with emitter as context.

    Iterates over a snapshot: events removed before their turn are skipped,
    events added during the dispatch wait for the next one.
    """
    events = vars(emitter).get(INSTANCE_EVENTS, {}).get(hook)
    if not events:
        return 0

    invoked = 0
    for event in list(events):
        live = vars(emitter).get(INSTANCE_EVENTS, {}).get(hook, [])
        if event not in live:
            continue
        try:
            event.invoke(emitter, _copy_params(params))
        except Exception:
            logging.debug(f"Listener for '{hook}' on {emitter!r} raised, aborting dispatch")
            raise
        invoked += 1
    return invoked


def dispatch(hook: str, target: EventEmitter, params: Any = None) -> None:
    """Fire hook on target and on every emitter wired to it.

    Each callback runs with the emitter owning its registration as the
    invocation context and receives its own shallow copy of params.
    Wiring is not transitive.
    """
    invoked = _invoke_listeners(target, hook, params)
    for wired in list(getattr(target, "wired_emitters", [])):
        invoked += _invoke_listeners(wired, hook, params)
    logging.debug(f"Fired '{hook}' on {target!r}: {invoked} listener(s) called")


def _bind(callback: EventCallback, instance: EventEmitter) -> EventCallback:
    # Only methods marked by @listens / @listens_once take self
    if isinstance(callback, types.FunctionType) and hasattr(callback, HOOKS_ATTRIBUTE):
        return types.MethodType(callback, instance)
    return callback


class EventEmitter:
    """Manages the events of an object.

    It can listen to events fired by itself or by emitters it is wired to,
    and forwards the events it fires to the emitters wired to it.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Methods marked with @listens / @listens_once become class events
        for value in list(vars(cls).values()):
            for hook, one_time in reversed(getattr(value, HOOKS_ATTRIBUTE, ())):
                if one_time:
                    add_one_time_listener(hook, value, cls, class_scoped=True)
                else:
                    add_listener(hook, value, cls, class_scoped=True)

    def __init__(self) -> None:
        # Class events might already be registered by decorators before the
        # instance exists, so keep whatever registry is already there.
        _registry(self, INSTANCE_EVENTS)
        self.wired_emitters: list[EventEmitter] = []

        for hook, events in self._class_events_snapshot().items():
            for event in events:
                if isinstance(event.callback, OnceCallback):
                    self.once(hook, _bind(event.callback.__wrapped__, self))
                else:
                    self.on(hook, _bind(event.callback, self))

    def _class_events_snapshot(self) -> Events:
        """Merge the class registries along the MRO, base classes first."""
        merged: Events = {}
        owners = [*reversed(type(self).__mro__), self]
        for owner in owners:
            for hook, events in vars(owner).get(CLASS_EVENTS, {}).items():
                merged.setdefault(hook, []).extend(events)
        return merged

    def on(self, hook: str, callback: EventCallback) -> EventEmitter:
        """Listen for a hook and call callback when it is fired."""
        add_listener(hook, callback, self)
        return self

    def once(self, hook: str, callback: EventCallback) -> EventEmitter:
        """Listen for a hook once; the registration is removed after the first call."""
        add_one_time_listener(hook, callback, self)
        return self

    def off(self, hook: str, callback: EventCallback) -> EventEmitter:
        """Remove the first registration of callback for hook.

        A callback registered with once() can be removed by passing the
        original callback. Unknown hooks and callbacks are ignored.
        """
        registry = _registry(self, INSTANCE_EVENTS)
        events = registry.get(hook)
        if not events:
            return self

        for index, event in enumerate(events):
            if event.matches(callback):
                del events[index]
                logging.debug(f"Removed listener for '{hook}' from {self!r}")
                break

        if not events:
            del registry[hook]
        return self

    def fire(self, hook: str, params: Any = None) -> EventEmitter:
        """Fire a hook. It propagates to all wired emitters."""
        dispatch(hook, self, params)
        return self

    def wire(self, emitter: EventEmitter) -> EventEmitter:
        """Wire an emitter so that it receives the hooks fired by this one."""
        self.wired_emitters.append(emitter)
        logging.debug(f"Wired {emitter!r} to {self!r}")
        return self

    def unwire(self, emitter: EventEmitter) -> EventEmitter:
        """Remove the first wiring to emitter, if any."""
        for index, wired in enumerate(self.wired_emitters):
            if wired is emitter:
                del self.wired_emitters[index]
                logging.debug(f"Unwired {emitter!r} from {self!r}")
                break
        return self

    def listeners(self, hook: str) -> list[EventCallback]:
        """Return the callbacks registered for hook, in dispatch order."""
        return [event.callback for event in vars(self).get(INSTANCE_EVENTS, {}).get(hook, [])]

    def has_listeners(self, hook: str) -> bool:
        return bool(vars(self).get(INSTANCE_EVENTS, {}).get(hook))

    @property
    def events(self) -> Events:
        """All events of this emitter, class defined and instance defined.

        Instance events take precedence when a hook is in both registries.
        """
        merged = {hook: list(events) for hook, events in self._class_events_snapshot().items()}
        for hook, events in vars(self).get(INSTANCE_EVENTS, {}).items():
            merged[hook] = list(events)
        return merged

"""Event records and the one-time callback wrapper."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from hookwire.lib.emitter import EventEmitter

EventCallback = Callable[[Any], Any]

_current_emitter: ContextVar[EventEmitter | None] = ContextVar("current_emitter", default=None)


def current_emitter() -> EventEmitter | None:
    """Return the emitter whose callback is currently being invoked.

    Outside of a dispatch this returns None.
    """
    return _current_emitter.get()


@dataclass(frozen=True, eq=False)
class Event:
    """A callback registered on an emitter for a specific hook.

    Events compare by identity: two registrations of the same callback are
    two distinct events.
    """

    name: str
    callback: EventCallback
    source: Any
    params: dict[str, Any] = field(default_factory=dict)

    def matches(self, callback: EventCallback) -> bool:
        """Check if this event was registered for callback, directly or through a wrapper."""
        if self.callback == callback:
            return True
        # A disarmed wrapper is already on its way out
        if not getattr(self.callback, "armed", True):
            return False
        wrapped = getattr(self.callback, "__wrapped__", None)
        return wrapped is not None and wrapped == callback

    def invoke(self, context: EventEmitter, params: Any) -> Any:
        """Call the callback with context as the current emitter."""
        token = _current_emitter.set(context)
        try:
            return self.callback(params)
        finally:
            _current_emitter.reset(token)


class OnceCallback:
    """Callback wrapper that disarms itself and unregisters after its first call.

    The wrapper removes itself from the emitter returned by current_emitter(),
    which is the emitter owning the registration.
    """

    def __init__(self, hook: str, callback: EventCallback) -> None:
        self.hook = hook
        self.__wrapped__ = callback
        self._armed = True

    @property
    def armed(self) -> bool:
        return self._armed

    def __call__(self, params: Any) -> Any:
        if not self._armed:
            return None
        self._armed = False
        try:
            return self.__wrapped__(params)
        finally:
            context = current_emitter()
            if context is not None:
                context.off(self.hook, self)

    def __repr__(self) -> str:
        return f"OnceCallback({self.hook!r}, {self.__wrapped__!r})"

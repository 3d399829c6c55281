from hookwire.lib.decorators import fires, listens, listens_once
from hookwire.lib.emitter import EventEmitter, add_listener, add_one_time_listener, dispatch
from hookwire.lib.event import Event, OnceCallback, current_emitter
from hookwire.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    Event.__name__,
    EventEmitter.__name__,
    OnceCallback.__name__,
    add_listener.__name__,
    add_one_time_listener.__name__,
    current_emitter.__name__,
    dispatch.__name__,
    fires.__name__,
    listens.__name__,
    listens_once.__name__,
]

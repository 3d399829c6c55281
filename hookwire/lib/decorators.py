"""Decorators for declaring listeners and fired hooks on EventEmitter subclasses."""

from __future__ import annotations

import functools
from typing import Any, Callable

from hookwire.constants import HOOKS_ATTRIBUTE


def _mark(func: Callable, hook: str, one_time: bool) -> Callable:
    hooks = list(getattr(func, HOOKS_ATTRIBUTE, ()))
    hooks.append((hook, one_time))
    setattr(func, HOOKS_ATTRIBUTE, hooks)
    return func


def listens(hook: str) -> Callable[[Callable], Callable]:
    """Register the decorated method as a listener for hook.

    The method is registered on the class when the class is created and
    bound to every new instance.

    Example:
        ```python
        class Player(EventEmitter):
            @listens("song_ended")
            def play_next(self, params):
                ...
        ```
    """

    def decorator(func: Callable) -> Callable:
        return _mark(func, hook, one_time=False)

    return decorator


def listens_once(hook: str) -> Callable[[Callable], Callable]:
    """Register the decorated method as a listener called only the first time hook is fired."""

    def decorator(func: Callable) -> Callable:
        return _mark(func, hook, one_time=True)

    return decorator


def fires(hook: str, params: Any = None) -> Callable[[Callable], Callable]:
    """Fire hook on the instance once the decorated method returns.

    The fired params are `params` when given, otherwise the return value of
    the method, or an empty dict when the method returns None. Nothing is
    fired if the method raises.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            result = func(self, *args, **kwargs)
            if params is not None:
                payload = params
            elif result is not None:
                payload = result
            else:
                payload = {}
            self.fire(hook, payload)
            return result

        return wrapper

    return decorator

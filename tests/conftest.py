"""Pytest fixtures for hookwire tests."""

import logging
import logging.handlers

import pytest

from hookwire.lib.event import current_emitter


class Recorder:
    """Callback recording the params and the invocation context of each call."""

    def __init__(self):
        self.calls = []

    def __call__(self, params):
        self.calls.append((current_emitter(), params))

    @property
    def count(self):
        return len(self.calls)

    @property
    def contexts(self):
        return [context for context, _ in self.calls]


@pytest.fixture
def recorder():
    """Create a Recorder callback."""
    return Recorder()


@pytest.fixture
def restore_logging():
    """Remove the handlers installed by configure_logger and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

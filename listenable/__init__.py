"""Synchronous event listener mixin."""

from .events import (
    Event,
    EventDispatcher,
    EventHandler,
    Listener,
    event_dispatcher,
    initialize,
)
from .logger import log_exception

__all__ = [
    "Event",
    "EventDispatcher",
    "EventHandler",
    "Listener",
    "event_dispatcher",
    "initialize",
    "log_exception",
]

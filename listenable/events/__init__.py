"""
Event system for listenable.

Provides a listener registry mixin with synchronous, snapshot-based dispatch
that any object can adopt by inheritance or through ``initialize``.
"""

from .base import Event
from .dispatcher import EventDispatcher, event_dispatcher, initialize
from .listener import EventHandler, Listener

__all__ = [
    "Event",
    "EventDispatcher",
    "EventHandler",
    "Listener",
    "event_dispatcher",
    "initialize",
]

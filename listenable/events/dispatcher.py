"""Event dispatcher - registers listeners and dispatches events to them.

Dispatch is synchronous. Any object can gain the capability either by
inheriting from :class:`EventDispatcher` or by passing it to
:func:`initialize`.
"""

from collections.abc import Mapping
from types import MethodType
from typing import Any, Dict, List, Optional

from ..logger import logger
from .base import coerce_event
from .listener import Listener, invoke_listener


class EventDispatcher:
    """Mixin that keeps a per-instance listener registry.

    Missing registries, unknown types and unknown listeners are silently
    ignored by every operation. Exceptions raised by listeners are not caught.
    """

    _listeners: Optional[Dict[str, List[Listener]]] = None

    @staticmethod
    def initialize(target: Any) -> None:
        """Copy the dispatcher operations onto ``target``.

        Args:
            target: A class (every instance gains the methods) or a single
                instance (only that object gains them)
        """
        initialize(target)

    def add_event_listener(self, types: str, listener: Listener) -> Listener:
        """Register ``listener`` for each space separated type in ``types``.

        A listener already registered for a type is moved to the end of that
        type's list instead of being added twice.

        Returns:
            The listener, unchanged
        """
        listeners = getattr(self, "_listeners", None)
        if listeners is None:
            listeners = self._listeners = {}
        # Split on single spaces only: "a  b" also names the empty type ""
        for event_type in types.split(" "):
            self.remove_event_listener(event_type, listener)
            listeners.setdefault(event_type, []).append(listener)
        logger.debug(f"Added listener {listener!r} for event types: {types}")
        return listener

    def remove_event_listener(self, types: str, listener: Listener) -> None:
        """Remove the first registration of ``listener`` for each type."""
        listeners = getattr(self, "_listeners", None)
        if listeners is None:
            return
        for event_type in types.split(" "):
            registered = listeners.get(event_type)
            if not registered:
                continue
            for index, candidate in enumerate(registered):
                if candidate is listener:
                    if len(registered) == 1:
                        # Empty lists are never kept
                        del listeners[event_type]
                    else:
                        del registered[index]
                    logger.debug(
                        f"Removed listener {listener!r} for event type: {event_type}"
                    )
                    break

    def remove_all_event_listeners(self, types: Optional[str] = None) -> None:
        """Remove every listener, or only those of the given types."""
        if not types:
            self._listeners = None
            logger.debug("Removed all event listeners")
        elif getattr(self, "_listeners", None) is not None:
            for event_type in types.split(" "):
                self._listeners.pop(event_type, None)
            logger.debug(f"Removed all listeners for event types: {types}")

    def dispatch_event(self, event_obj: Any, target: Any = None) -> bool:
        """Dispatch an event to the listeners registered for its type.

        Args:
            event_obj: Event type string, mapping with a ``type`` key, or an
                event object with a ``type`` attribute
            target: Value for ``event.target``; defaults to this object

        Event objects are mutated in place (``target`` is set on them). A
        mapping is copied into a new :class:`Event`, so the caller's mapping
        never sees ``target`` or fields set by listeners.

        Returns:
            True if any listener returned a truthy value
        """
        listeners = getattr(self, "_listeners", None)
        if not event_obj or listeners is None:
            return False

        if isinstance(event_obj, str):
            event_type = event_obj
        elif isinstance(event_obj, Mapping):
            event_type = event_obj.get("type")
        else:
            event_type = getattr(event_obj, "type", None)
        registered = listeners.get(event_type) if isinstance(event_type, str) else None
        if not registered:
            logger.debug(f"No listeners registered for event: {event_type!r}")
            return False

        event = coerce_event(event_obj)
        event.target = target if target is not None else self

        # Listeners added or removed during this pass only affect later passes
        snapshot = list(registered)
        logger.debug(f"Dispatching '{event_type}' to {len(snapshot)} listeners")
        handled = False
        for listener in snapshot:
            if invoke_listener(listener, event):
                handled = True
        return handled

    def has_event_listener(self, event_type: str) -> bool:
        """Return whether any listener is registered for ``event_type``."""
        listeners = getattr(self, "_listeners", None)
        return bool(listeners and event_type in listeners)

    def __str__(self) -> str:
        return "[EventDispatcher]"


_OPERATIONS = (
    "add_event_listener",
    "remove_event_listener",
    "remove_all_event_listeners",
    "has_event_listener",
    "dispatch_event",
)


def initialize(target: Any) -> None:
    """Give ``target`` the five dispatcher operations without inheritance."""
    for name in _OPERATIONS:
        function = EventDispatcher.__dict__[name]
        if isinstance(target, type):
            setattr(target, name, function)
        else:
            setattr(target, name, MethodType(function, target))
    logger.debug(f"Initialized event dispatching on {target!r}")


# Global event dispatcher instance
event_dispatcher = EventDispatcher()

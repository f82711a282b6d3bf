"""Listener variants accepted by the dispatcher."""

from typing import Any, Callable, Protocol, Union, runtime_checkable


@runtime_checkable
class EventHandler(Protocol):
    """Object-style listener exposing a ``handle_event`` method."""

    def handle_event(self, event: Any) -> Any: ...


Listener = Union[Callable[[Any], Any], EventHandler]


def invoke_listener(listener: Listener, event: Any) -> Any:
    """Call ``listener`` with ``event`` using its calling convention."""
    handle_event = getattr(listener, "handle_event", None)
    if callable(handle_event):
        return handle_event(event)
    return listener(event)  # type: ignore[operator]

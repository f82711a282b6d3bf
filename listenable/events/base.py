"""Event envelope passed to listeners."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Base class for all events.

    Only ``type`` is required. Any extra keyword becomes a payload field, and
    ``target`` is filled in by the dispatcher.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    type: str = Field(..., description="Event type name")
    target: Any = Field(default=None, description="Object the event was dispatched on")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def coerce_event(event_obj: Any) -> Any:
    """Turn a type string or a mapping into an :class:`Event`.

    Other objects are returned unchanged so that caller-built events can be
    mutated in place.
    """
    if isinstance(event_obj, str):
        return Event(type=event_obj)
    if isinstance(event_obj, Mapping):
        return Event.model_validate(dict(event_obj))
    return event_obj

"""Event processor base classes."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chainview.events.types import (
        Event,
        StructureChangedEvent,
        VisibilityRecomputedEvent,
    )


# Mapping from event class name to handler method name.
_EVENT_METHOD_MAP: dict[str, str] = {
    "StructureChangedEvent": "on_structure_changed",
    "VisibilityRecomputedEvent": "on_visibility_recomputed",
}


class EventProcessor:
    """Base class for event consumers.

    Subclass and override ``on_event`` to receive all events,
    or use ``TypedEventProcessor`` for per-type dispatch.
    """

    def on_event(self, event: Event) -> None:
        """Called for every event. Override in subclasses."""

    def shutdown(self) -> None:
        """Called once when the controller is closed. Override to flush buffers."""


class TypedEventProcessor(EventProcessor):
    """Dispatches ``on_event`` to typed handler methods automatically.

    Override any of the ``on_*`` methods below to handle specific event types.
    Unhandled event types are silently ignored.
    """

    def on_event(self, event: Event) -> None:
        method_name = _EVENT_METHOD_MAP.get(type(event).__name__)
        if method_name is not None:
            method = getattr(self, method_name, None)
            if method is not None:
                method(event)

    def on_structure_changed(self, event: StructureChangedEvent) -> None: ...
    def on_visibility_recomputed(self, event: VisibilityRecomputedEvent) -> None: ...


class StructureChangeCallback(TypedEventProcessor):
    """Adapts a plain ``structure_changed(container_ids)`` callable.

    This is the shape a layout engine usually exposes: it receives the ids of
    the containers that need to be laid out again.
    """

    def __init__(self, callback: Callable[[list[str]], object]) -> None:
        self._callback = callback

    def on_structure_changed(self, event: StructureChangedEvent) -> None:
        self._callback(list(event.affected_container_ids))

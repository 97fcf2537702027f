"""Event system for observing collapse and expand operations."""

from chainview.events.dispatcher import EventDispatcher
from chainview.events.processor import (
    EventProcessor,
    StructureChangeCallback,
    TypedEventProcessor,
)
from chainview.events.types import (
    BaseEvent,
    ChangeTrigger,
    Event,
    StructureChangedEvent,
    VisibilityRecomputedEvent,
)

__all__ = [
    # Event types
    "BaseEvent",
    "ChangeTrigger",
    "Event",
    "StructureChangedEvent",
    "VisibilityRecomputedEvent",
    # Processor interfaces
    "EventProcessor",
    "StructureChangeCallback",
    "TypedEventProcessor",
    # Dispatcher
    "EventDispatcher",
]

"""Event types emitted by the collapse controller."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum


class ChangeTrigger(Enum):
    """Operation that caused a structural change.

    Values:
        TOGGLE: A single container was collapsed or expanded.
        EXPAND: A batch of containers was expanded.
    """

    TOGGLE = "toggle"
    EXPAND = "expand"


def _generate_event_id() -> str:
    """Generate a unique event ID."""
    return uuid.uuid4().hex[:16]


def _now() -> float:
    """Current timestamp."""
    return time.time()


@dataclass(frozen=True)
class BaseEvent:
    """Base class for all controller events.

    Attributes:
        event_id: Unique identifier for this event.
        timestamp: Unix timestamp when the event was created.
    """

    event_id: str = field(default_factory=_generate_event_id)
    timestamp: float = field(default_factory=_now)


@dataclass(frozen=True)
class StructureChangedEvent(BaseEvent):
    """Emitted once per toggle/expand operation; a re-layout is required.

    Attributes:
        affected_container_ids: Containers whose layout footprint changed.
        trigger: Operation that caused the change.
    """

    affected_container_ids: tuple[str, ...] = ()
    trigger: ChangeTrigger = ChangeTrigger.TOGGLE

    def __post_init__(self) -> None:
        # Accept lists and plain strings from callers
        if not isinstance(self.affected_container_ids, tuple):
            object.__setattr__(self, "affected_container_ids", tuple(self.affected_container_ids))
        if isinstance(self.trigger, str):
            object.__setattr__(self, "trigger", ChangeTrigger(self.trigger))


@dataclass(frozen=True)
class VisibilityRecomputedEvent(BaseEvent):
    """Emitted after every recomputation of the visible state.

    Attributes:
        hidden_node_count: Nodes hidden by a collapsed ancestor.
        hidden_edge_count: Original edges hidden because an endpoint is hidden.
        decorative_edge_count: Decorative edges drawn in their place.
    """

    hidden_node_count: int = 0
    hidden_edge_count: int = 0
    decorative_edge_count: int = 0


Event = StructureChangedEvent | VisibilityRecomputedEvent

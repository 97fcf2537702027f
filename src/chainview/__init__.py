"""Chainview - collapse/expand engine for nested chain diagrams."""

from chainview._common import (
    CONTAINER,
    DEFAULT_GROUP_TYPES,
    UNIT,
    build_node_map,
    expand_with_parents,
    get_ancestor_chain,
    get_depth,
    get_least_common_parent,
    get_parent_chain,
    iter_ancestors,
    sort_parents_before_children,
)
from chainview.collapse import (
    CollapseResult,
    compute_hidden_node_ids,
    compute_nested_unit_counts,
    recompute,
    synthesize_decorative_edges,
)
from chainview.controller import CollapseController, LatestRef
from chainview.events import (
    ChangeTrigger,
    EventDispatcher,
    EventProcessor,
    StructureChangeCallback,
    StructureChangedEvent,
    TypedEventProcessor,
    VisibilityRecomputedEvent,
)
from chainview.exceptions import SnapshotError
from chainview.snapshot import Snapshot, load_snapshot, parse_snapshot

__all__ = [
    # Engine
    "CollapseController",
    "CollapseResult",
    "LatestRef",
    "compute_hidden_node_ids",
    "compute_nested_unit_counts",
    "recompute",
    "synthesize_decorative_edges",
    # Hierarchy
    "CONTAINER",
    "DEFAULT_GROUP_TYPES",
    "UNIT",
    "build_node_map",
    "expand_with_parents",
    "get_ancestor_chain",
    "get_depth",
    "get_least_common_parent",
    "get_parent_chain",
    "iter_ancestors",
    "sort_parents_before_children",
    # Events
    "ChangeTrigger",
    "EventDispatcher",
    "EventProcessor",
    "StructureChangeCallback",
    "StructureChangedEvent",
    "TypedEventProcessor",
    "VisibilityRecomputedEvent",
    # Snapshots
    "Snapshot",
    "SnapshotError",
    "load_snapshot",
    "parse_snapshot",
]

"""Shared hierarchy helpers for the collapse engine.

The containment tree is a flat collection of node dicts where ``parentId``
is a foreign key into the same collection. Every walk here is explicit and
cycle-guarded, so corrupt input degrades instead of looping forever.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Iterator, Mapping
from typing import Any

logger = logging.getLogger(__name__)

CONTAINER = "container"
UNIT = "unit"

DEFAULT_GROUP_TYPES: frozenset[str] = frozenset({"container"})

Node = dict[str, Any]
Edge = dict[str, Any]


# =============================================================================
# Node Predicates
# =============================================================================


def is_container(node: Mapping[str, Any] | None) -> bool:
    """Check if a node is a container (can own children and be collapsed)."""
    return node is not None and node.get("type") == CONTAINER


def is_unit(node: Mapping[str, Any] | None) -> bool:
    return node is not None and node.get("type") == UNIT


def is_collapsed(node: Mapping[str, Any] | None) -> bool:
    """Check if a node is a collapsed container."""
    if not is_container(node):
        return False
    return bool((node.get("data") or {}).get("collapsed", False))


def is_group_container(
    node: Mapping[str, Any] | None,
    group_types: Collection[str] = DEFAULT_GROUP_TYPES,
) -> bool:
    """Check if a container only aggregates its children visually."""
    if not is_container(node):
        return False
    return (node.get("data") or {}).get("elementType") in group_types


def is_decorative(edge: Mapping[str, Any]) -> bool:
    """Check if an edge was synthesized by a previous recomputation."""
    return bool((edge.get("data") or {}).get("decorative", False))


# =============================================================================
# Hierarchy Walking
# =============================================================================


def build_node_map(nodes: Iterable[Node]) -> dict[str, Node]:
    """Build an id -> node lookup table."""
    return {node["id"]: node for node in nodes}


def get_parent(node_id: str, node_map: Mapping[str, Node]) -> str | None:
    """Get the parent id of a node, or None for roots and dangling parents."""
    node = node_map.get(node_id)
    if node is None:
        return None
    parent_id = node.get("parentId")
    if not parent_id or parent_id not in node_map:
        return None
    return parent_id


def iter_ancestors(node_id: str, node_map: Mapping[str, Node]) -> Iterator[str]:
    """Yield strict ancestors of a node, from immediate parent to root.

    Stops at a dangling ``parentId``. If the chain loops back on itself the
    walk stops at the first repeated id.
    """
    seen = {node_id}
    parent_id = get_parent(node_id, node_map)
    while parent_id is not None:
        if parent_id in seen:
            logger.debug("Cycle in parent chain of %r at %r", node_id, parent_id)
            return
        seen.add(parent_id)
        yield parent_id
        parent_id = get_parent(parent_id, node_map)


def get_ancestor_chain(node_id: str, node_map: Mapping[str, Node]) -> list[str]:
    """Get the chain of ancestors for a node, from immediate to root."""
    return list(iter_ancestors(node_id, node_map))


def get_parent_chain(node_id: str | None, node_map: Mapping[str, Node]) -> list[str]:
    """Get the node itself followed by all of its ancestors."""
    if not node_id:
        return []
    return [node_id, *iter_ancestors(node_id, node_map)]


def get_depth(node_id: str, node_map: Mapping[str, Node]) -> int:
    """Get the nesting depth of a node (0 = root level)."""
    return sum(1 for _ in iter_ancestors(node_id, node_map))


def get_least_common_parent(
    left: str | None,
    right: str | None,
    node_map: Mapping[str, Node],
) -> str | None:
    """Find the deepest node that contains (or is) both ``left`` and ``right``."""
    if not left or not right:
        return None
    if left == right:
        return left

    up = set(get_parent_chain(left, node_map))
    for candidate in get_parent_chain(right, node_map):
        if candidate in up:
            return candidate
    return None


def expand_with_parents(ids: Iterable[str], node_map: Mapping[str, Node]) -> list[str]:
    """Return ``ids`` plus every ancestor of each, without duplicates."""
    result: dict[str, None] = {}
    for node_id in ids:
        for member in get_parent_chain(node_id, node_map):
            if member in result:
                break
            result[member] = None
    return list(result)


def sort_parents_before_children(nodes: Iterable[Node]) -> list[Node]:
    """Stable-sort nodes so that every parent precedes its descendants."""
    nodes = list(nodes)
    node_map = build_node_map(nodes)
    depths = {node["id"]: get_depth(node["id"], node_map) for node in nodes}
    return sorted(nodes, key=lambda n: depths[n["id"]])

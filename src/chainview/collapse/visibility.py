"""Hidden-node computation from container collapse state."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chainview._common import Node, build_node_map, is_collapsed, iter_ancestors


def get_collapsed_ids(nodes: Iterable[Node]) -> set[str]:
    """Get ids of all containers whose ``collapsed`` flag is set."""
    return {node["id"] for node in nodes if is_collapsed(node)}


def is_hidden_by_ancestor(
    node_id: str,
    node_map: Mapping[str, Node],
    collapsed_ids: set[str],
) -> bool:
    """Check if any strict ancestor of a node is a collapsed container."""
    return any(ancestor in collapsed_ids for ancestor in iter_ancestors(node_id, node_map))


def compute_hidden_node_ids(nodes: Iterable[Node]) -> set[str]:
    """Compute the ids of nodes hidden by a collapsed ancestor.

    A collapsed container does not hide itself; its own visibility depends
    only on its ancestors.
    """
    nodes = list(nodes)
    node_map = build_node_map(nodes)
    collapsed_ids = get_collapsed_ids(nodes)
    if not collapsed_ids:
        return set()

    return {
        node["id"]
        for node in nodes
        if is_hidden_by_ancestor(node["id"], node_map, collapsed_ids)
    }

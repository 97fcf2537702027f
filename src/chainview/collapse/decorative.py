"""Decorative edge synthesis for collapsed containers.

When a collapse hides one endpoint of an edge, the edge itself is hidden.
To keep the connectivity readable, a decorative edge is drawn in its place,
rerouted to the nearest visible collapsed ancestor of each hidden endpoint
(the endpoint's *proxy*).

Example:
    A (collapsed) contains B; C is a root unit; edge E1 is B -> C.
    B is hidden, so E1 is hidden and a decorative edge A -> C is emitted
    with ``data.originalEdgeId == "E1"`` and ``data.expandContainerIds == ["A"]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chainview._common import Edge, Node, build_node_map, is_decorative, iter_ancestors
from chainview.collapse.edges import HANDLE_KEYS
from chainview.collapse.visibility import get_collapsed_ids

# Keys that are recomputed for a decorative edge instead of copied over.
_NOT_CARRIED = frozenset({"id", "source", "target", "hidden", "selected", "zIndex", *HANDLE_KEYS})


def decorative_edge_id(original_id: str, source: str, target: str) -> str:
    """Derive the id of a decorative edge from its origin and endpoints."""
    return f"decorative:{original_id}:{source}->{target}"


def find_proxy(
    node_id: str,
    node_map: Mapping[str, Node],
    collapsed_ids: set[str],
    hidden_ids: set[str],
) -> str | None:
    """Find the nearest ancestor that is collapsed and itself visible."""
    for ancestor in iter_ancestors(node_id, node_map):
        if ancestor in collapsed_ids and ancestor not in hidden_ids:
            return ancestor
    return None


def _build_decorative_edge(
    edge: Edge,
    source: str,
    target: str,
    proxies: list[str],
) -> Edge:
    carried = {key: value for key, value in edge.items() if key not in _NOT_CARRIED}
    return {
        **carried,
        "id": decorative_edge_id(edge["id"], source, target),
        "source": source,
        "target": target,
        "hidden": False,
        "zIndex": (edge.get("zIndex") or 0) + 1,
        "data": {
            **(edge.get("data") or {}),
            "decorative": True,
            "originalEdgeId": edge["id"],
            "expandContainerIds": proxies,
        },
    }


def synthesize_decorative_edges(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    hidden_ids: set[str],
) -> list[Edge]:
    """Build the full decorative edge set for the current snapshot.

    Edges that cannot be represented are skipped without error: no visible
    proxy exists, rerouting turns them into a self-loop, or an endpoint does
    not resolve to a visible node.
    """
    nodes = list(nodes)
    node_map = build_node_map(nodes)
    collapsed_ids = get_collapsed_ids(nodes)

    def is_drawable(node_id: str) -> bool:
        return node_id in node_map and node_id not in hidden_ids

    decorative: list[Edge] = []
    emitted: set[tuple[str, str, str]] = set()

    for edge in edges:
        if is_decorative(edge):
            continue

        source, target = edge["source"], edge["target"]
        source_hidden = source in hidden_ids
        target_hidden = target in hidden_ids
        if not source_hidden and not target_hidden:
            continue

        proxies: list[str] = []
        new_source, new_target = source, target
        if source_hidden:
            new_source = find_proxy(source, node_map, collapsed_ids, hidden_ids)
            if new_source is None:
                continue
            proxies.append(new_source)
        if target_hidden:
            new_target = find_proxy(target, node_map, collapsed_ids, hidden_ids)
            if new_target is None:
                continue
            if new_target not in proxies:
                proxies.append(new_target)

        if new_source == new_target:
            continue
        if not (is_drawable(new_source) and is_drawable(new_target)):
            continue

        key = (edge["id"], new_source, new_target)
        if key in emitted:
            continue
        emitted.add(key)

        decorative.append(_build_decorative_edge(edge, new_source, new_target, proxies))

    return decorative

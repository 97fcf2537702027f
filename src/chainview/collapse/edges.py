"""Edge visibility for a recomputed collapse state."""

from __future__ import annotations

from collections.abc import Iterable

from chainview._common import Edge, is_decorative

HANDLE_KEYS = ("sourceHandle", "targetHandle")


def normalize_handles(edge: Edge) -> Edge:
    """Drop handle references that are explicitly ``None``.

    An absent handle is the canonical "no handle" form; a ``None`` left in
    place would make the renderer look up a connection point that no longer
    exists.
    """
    if not any(key in edge and edge[key] is None for key in HANDLE_KEYS):
        return edge
    return {key: value for key, value in edge.items() if not (key in HANDLE_KEYS and value is None)}


def reconcile_edge_visibility(edges: Iterable[Edge], hidden_ids: set[str]) -> list[Edge]:
    """Set ``hidden`` on every original edge from its endpoints' visibility.

    Decorative edges from a previous recomputation are dropped; they are
    re-synthesized from scratch.
    """
    result: list[Edge] = []
    for edge in edges:
        if is_decorative(edge):
            continue
        normalized = normalize_handles(edge)
        hidden = normalized["source"] in hidden_ids or normalized["target"] in hidden_ids
        result.append({**normalized, "hidden": hidden})
    return result

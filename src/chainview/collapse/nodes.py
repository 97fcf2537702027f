"""Node flag application for a recomputed collapse state.

Every function returns new node dicts; the input collection is left as-is
so reference-equality change detection in the rendering layer keeps working.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping
from typing import Any

from chainview._common import (
    DEFAULT_GROUP_TYPES,
    Node,
    is_collapsed,
    is_container,
    is_group_container,
)

# Data keys forced while a group container is collapsed, and where their
# declared values are parked until it expands again.
_FORCED_DATA_KEYS = ("inputEnabled", "outputEnabled")
_DECLARED_KEY = "declaredConnectivity"


def _force_proxy_handles(node: Node) -> Node:
    """Enable both connection points and block direct user connections."""
    data = dict(node.get("data") or {})
    if _DECLARED_KEY not in data:
        declared = {key: data[key] for key in _FORCED_DATA_KEYS if key in data}
        if "connectable" in node:
            declared["connectable"] = node["connectable"]
        data[_DECLARED_KEY] = declared

    data["inputEnabled"] = True
    data["outputEnabled"] = True
    return {**node, "data": data, "connectable": False}


def _restore_declared_handles(node: Node) -> Node:
    """Undo ``_force_proxy_handles``, restoring keys exactly as declared."""
    data = dict(node.get("data") or {})
    if _DECLARED_KEY not in data:
        return node

    declared = data.pop(_DECLARED_KEY)
    for key in _FORCED_DATA_KEYS:
        data.pop(key, None)
    restored = {**node, "data": data}
    restored.pop("connectable", None)

    for key, value in declared.items():
        if key == "connectable":
            restored["connectable"] = value
        else:
            data[key] = value
    return restored


def apply_node_flags(
    nodes: Iterable[Node],
    hidden_ids: set[str],
    *,
    group_types: Collection[str] = DEFAULT_GROUP_TYPES,
) -> list[Node]:
    """Apply ``hidden``/``selected`` flags and group-container proxy handles."""
    result: list[Node] = []
    for node in nodes:
        hidden = node["id"] in hidden_ids
        updated = {**node, "hidden": hidden}
        if hidden:
            updated["selected"] = False

        if is_group_container(updated, group_types):
            if is_collapsed(updated):
                updated = _force_proxy_handles(updated)
            else:
                updated = _restore_declared_handles(updated)

        result.append(updated)
    return result


def apply_unit_counts(nodes: Iterable[Node], counts: Mapping[str, int]) -> list[Node]:
    """Set ``data.unitCount`` on every container."""
    return [
        {**node, "data": {**(node.get("data") or {}), "unitCount": counts.get(node["id"], 0)}}
        if is_container(node)
        else node
        for node in nodes
    ]


def attach_toggle_handles(
    nodes: Iterable[Node],
    handle_for: Callable[[str], Callable[[], Any]],
) -> list[Node]:
    """Set ``data.onToggleCollapse`` on every container."""
    return [
        {**node, "data": {**(node.get("data") or {}), "onToggleCollapse": handle_for(node["id"])}}
        if is_container(node)
        else node
        for node in nodes
    ]

"""Reading diagram snapshots from JSON.

A snapshot holds caller-owned state: nodes with their ``collapsed`` flags
and the original edges. Decorative edges left in the file are discarded
since every recomputation derives them again. Saving collapse state is up
to the editor that owns the file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chainview._common import Edge, Node, is_decorative
from chainview.exceptions import SnapshotError


@dataclass(frozen=True)
class Snapshot:
    """Nodes and edges of one diagram."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


def parse_snapshot(raw: Any, path: str | None = None) -> Snapshot:
    """Validate a decoded JSON document and turn it into a Snapshot."""
    if not isinstance(raw, dict):
        raise SnapshotError("top level must be an object", path)

    nodes = raw.get("nodes")
    if not isinstance(nodes, list):
        raise SnapshotError("'nodes' must be a list", path)
    edges = raw.get("edges", [])
    if not isinstance(edges, list):
        raise SnapshotError("'edges' must be a list", path)

    for index, node in enumerate(nodes):
        if not isinstance(node, dict) or not isinstance(node.get("id"), str):
            raise SnapshotError(f"node #{index} has no string 'id'", path)
    for index, edge in enumerate(edges):
        if not isinstance(edge, dict) or not all(isinstance(edge.get(key), str) for key in ("id", "source", "target")):
            raise SnapshotError(f"edge #{index} needs string 'id', 'source' and 'target'", path)

    return Snapshot(nodes=nodes, edges=[edge for edge in edges if not is_decorative(edge)])


def load_snapshot(path: str | Path) -> Snapshot:
    """Load a snapshot from a JSON file."""
    try:
        with open(path) as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise SnapshotError("file not found", str(path)) from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"not valid JSON ({e.msg} at line {e.lineno})", str(path)) from e
    return parse_snapshot(raw, str(path))

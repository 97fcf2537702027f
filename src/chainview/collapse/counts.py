"""Unit count aggregation for container badges."""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

from chainview._common import Node, build_node_map, is_container, is_unit


def build_containment_graph(nodes: Iterable[Node]) -> nx.DiGraph:
    """Build a parent -> child DiGraph from ``parentId`` references.

    Dangling parent references are ignored, so such nodes become roots.
    """
    nodes = list(nodes)
    node_map = build_node_map(nodes)

    G = nx.DiGraph()
    for node in nodes:
        G.add_node(node["id"], type=node.get("type"))
    for node in nodes:
        parent_id = node.get("parentId")
        if parent_id and parent_id in node_map:
            G.add_edge(parent_id, node["id"])
    return G


def compute_nested_unit_counts(nodes: Iterable[Node]) -> dict[str, int]:
    """Count the unit descendants of every container, at any depth.

    Collapse state is ignored: the count reflects everything a container
    holds, not what is currently visible.
    """
    nodes = list(nodes)
    G = build_containment_graph(nodes)
    node_map = build_node_map(nodes)

    counts: dict[str, int] = {}
    for node in nodes:
        if not is_container(node):
            continue
        counts[node["id"]] = sum(
            1
            for descendant in nx.descendants(G, node["id"])
            if descendant != node["id"] and is_unit(node_map[descendant])
        )
    return counts

"""Hierarchical visibility and edge rerouting for collapsible containers.

This package turns a node/edge snapshot plus per-container ``collapsed``
flags into the collections the rendering layer draws.

Public API:
    from chainview.collapse import recompute
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field

from chainview._common import DEFAULT_GROUP_TYPES, Edge, Node
from chainview.collapse.counts import compute_nested_unit_counts
from chainview.collapse.decorative import decorative_edge_id, find_proxy, synthesize_decorative_edges
from chainview.collapse.edges import normalize_handles, reconcile_edge_visibility
from chainview.collapse.nodes import apply_node_flags, apply_unit_counts, attach_toggle_handles
from chainview.collapse.visibility import compute_hidden_node_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollapseResult:
    """Output of one recomputation.

    Attributes:
        nodes: Nodes with ``hidden``, ``selected``, ``unitCount`` and
            group-container handle flags applied.
        edges: Original edges with ``hidden`` set, followed by every
            decorative edge.
        hidden_node_ids: Ids of nodes hidden by a collapsed ancestor.
        decorative_edges: The decorative edges appended to ``edges``.
    """

    nodes: list[Node]
    edges: list[Edge]
    hidden_node_ids: frozenset[str] = field(default_factory=frozenset)
    decorative_edges: list[Edge] = field(default_factory=list)

    @property
    def hidden_edge_ids(self) -> frozenset[str]:
        return frozenset(edge["id"] for edge in self.edges if edge.get("hidden"))


def recompute(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    *,
    group_types: Collection[str] = DEFAULT_GROUP_TYPES,
) -> CollapseResult:
    """Recompute visibility, unit counts and decorative edges from scratch.

    Inputs are never mutated. Decorative edges present in ``edges`` (left
    over from an earlier pass) are discarded and re-synthesized.
    """
    nodes = list(nodes)
    edges = list(edges)

    hidden_ids = compute_hidden_node_ids(nodes)
    counts = compute_nested_unit_counts(nodes)
    flagged_nodes = apply_unit_counts(
        apply_node_flags(nodes, hidden_ids, group_types=group_types),
        counts,
    )

    reconciled = reconcile_edge_visibility(edges, hidden_ids)
    decorative = synthesize_decorative_edges(flagged_nodes, reconciled, hidden_ids)

    logger.debug(
        "Recomputed collapse state: %d/%d nodes hidden, %d decorative edges",
        len(hidden_ids),
        len(nodes),
        len(decorative),
    )

    return CollapseResult(
        nodes=flagged_nodes,
        edges=[*reconciled, *decorative],
        hidden_node_ids=frozenset(hidden_ids),
        decorative_edges=decorative,
    )


__all__ = [
    "CollapseResult",
    "apply_node_flags",
    "apply_unit_counts",
    "attach_toggle_handles",
    "compute_hidden_node_ids",
    "compute_nested_unit_counts",
    "decorative_edge_id",
    "find_proxy",
    "normalize_handles",
    "reconcile_edge_visibility",
    "recompute",
    "synthesize_decorative_edges",
]

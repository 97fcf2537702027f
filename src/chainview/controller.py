"""Collapse/expand controller for a single diagram.

The controller owns the current node/edge snapshot and turns toggle and
expand requests into full recomputations, followed by one structural-change
notification for the layout engine.

Example:
    >>> def relayout(container_ids):
    ...     print("relayout", container_ids)
    >>> controller = CollapseController(
    ...     nodes, edges, event_processors=[StructureChangeCallback(relayout)]
    ... )
    >>> controller.toggle("A")
    relayout ['A']
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Collection, Iterable
from typing import Generic, TypeVar

from chainview._common import (
    DEFAULT_GROUP_TYPES,
    Edge,
    Node,
    build_node_map,
    get_parent,
    is_collapsed,
    is_container,
    is_decorative,
    iter_ancestors,
)
from chainview.collapse import CollapseResult, attach_toggle_handles, recompute
from chainview.events import (
    ChangeTrigger,
    EventDispatcher,
    EventProcessor,
    StructureChangedEvent,
    VisibilityRecomputedEvent,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestRef(Generic[T]):
    """A single mutable slot that always holds the latest value."""

    __slots__ = ("current",)

    def __init__(self, current: T) -> None:
        self.current = current


class CollapseController:
    """Keeps a diagram's collapse state and recomputes it on every change.

    Args:
        nodes: Node dicts, each with ``id`` and optional ``parentId``.
        edges: Edge dicts with ``id``, ``source`` and ``target``.
        event_processors: Receive ``StructureChangedEvent`` after each
            toggle/expand and ``VisibilityRecomputedEvent`` after every
            recomputation.
        group_types: Element types treated as group containers.
        attach_handles: Put a ``data.onToggleCollapse`` handle on containers.
        strict_events: Propagate processor errors instead of logging them.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        *,
        event_processors: list[EventProcessor] | None = None,
        group_types: Collection[str] | None = None,
        attach_handles: bool = True,
        strict_events: bool = False,
    ) -> None:
        self._dispatcher = EventDispatcher(event_processors, strict=strict_events)
        self._group_types = frozenset(group_types) if group_types is not None else DEFAULT_GROUP_TYPES
        self._attach_handles = attach_handles

        self._toggle_ref: LatestRef[Callable[[str], None]] = LatestRef(self._ignore_toggle)
        self._node_handles: dict[str, Callable[[], None]] = {}

        self._result = CollapseResult(nodes=[], edges=[])
        self._apply(list(nodes), list(edges))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Latest node collection (a new list after every recomputation)."""
        return self._result.nodes

    @property
    def edges(self) -> list[Edge]:
        """Latest edge collection: original edges, then decorative edges."""
        return self._result.edges

    @property
    def result(self) -> CollapseResult:
        return self._result

    @property
    def hidden_node_ids(self) -> frozenset[str]:
        return self._result.hidden_node_ids

    @property
    def decorative_edges(self) -> list[Edge]:
        return self._result.decorative_edges

    def is_collapsed(self, container_id: str) -> bool:
        node = build_node_map(self.nodes).get(container_id)
        return is_collapsed(node)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def request_toggle(self, container_id: str) -> None:
        """Stable entry point for the rendering layer.

        Always forwards to the toggle bound to the latest snapshot, however
        many recomputations happened since this method was looked up.
        """
        self._toggle_ref.current(container_id)

    def toggle(self, container_id: str) -> None:
        """Flip one container between collapsed and expanded."""
        self.request_toggle(container_id)

    def expand_containers(self, container_ids: Iterable[str]) -> list[str]:
        """Expand every currently-collapsed container among ``container_ids``.

        Returns the ids that actually changed. Nothing is recomputed and no
        event is emitted when none of them was collapsed.
        """
        node_map = build_node_map(self.nodes)
        changed: list[str] = []
        for container_id in container_ids:
            if container_id in changed:
                continue
            if is_collapsed(node_map.get(container_id)):
                changed.append(container_id)

        if not changed:
            return []

        changed_set = set(changed)
        nodes = [
            _with_collapsed(node, False) if node["id"] in changed_set else node
            for node in self.nodes
        ]
        self._apply(nodes, self._original_edges())
        self._notify(changed, ChangeTrigger.EXPAND)
        return changed

    def reveal(self, node_id: str) -> list[str]:
        """Expand every collapsed ancestor so that ``node_id`` becomes visible."""
        node_map = build_node_map(self.nodes)
        ancestors = list(iter_ancestors(node_id, node_map))
        return self.expand_containers(reversed(ancestors))

    def update(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Replace the snapshot after an edit and re-apply visibility.

        Element or connection changes are the editor's own structural
        changes, so no ``StructureChangedEvent`` is emitted here.
        """
        self._apply(list(nodes), list(edges))

    def close(self) -> None:
        """Shut down event processors."""
        self._dispatcher.shutdown()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, nodes: list[Node], edges: list[Edge]) -> None:
        result = recompute(nodes, edges, group_types=self._group_types)
        if self._attach_handles:
            container_ids = {node["id"] for node in result.nodes if is_container(node)}
            self._node_handles = {
                container_id: handle
                for container_id, handle in self._node_handles.items()
                if container_id in container_ids
            }
            result = CollapseResult(
                nodes=attach_toggle_handles(result.nodes, self._handle_for),
                edges=result.edges,
                hidden_node_ids=result.hidden_node_ids,
                decorative_edges=result.decorative_edges,
            )
        self._result = result

        # Fresh closure over the fresh snapshot
        snapshot_nodes, snapshot_edges = result.nodes, self._original_edges()
        self._toggle_ref.current = lambda container_id: self._process_toggle(
            container_id, snapshot_nodes, snapshot_edges
        )

        if self._dispatcher.active:
            self._dispatcher.emit(
                VisibilityRecomputedEvent(
                    hidden_node_count=len(result.hidden_node_ids),
                    hidden_edge_count=sum(
                        1 for edge in result.edges if edge.get("hidden") and not is_decorative(edge)
                    ),
                    decorative_edge_count=len(result.decorative_edges),
                )
            )

    def _process_toggle(self, container_id: str, nodes: list[Node], edges: list[Edge]) -> None:
        node_map = build_node_map(nodes)
        container = node_map.get(container_id)
        if container is None:
            logger.warning("Ignoring toggle of unknown node %r", container_id)
            return
        if not is_container(container):
            logger.warning("Ignoring toggle of non-container node %r", container_id)
            return

        collapsed = not is_collapsed(container)
        toggled = [_with_collapsed(node, collapsed) if node["id"] == container_id else node for node in nodes]
        self._apply(toggled, edges)

        parent_id = get_parent(container_id, node_map)
        self._notify([parent_id] if parent_id is not None else [container_id], ChangeTrigger.TOGGLE)

    def _notify(self, container_ids: list[str], trigger: ChangeTrigger) -> None:
        logger.debug("Structure changed (%s): %s", trigger.value, container_ids)
        self._dispatcher.emit(StructureChangedEvent(affected_container_ids=tuple(container_ids), trigger=trigger))

    def _handle_for(self, container_id: str) -> Callable[[], None]:
        handle = self._node_handles.get(container_id)
        if handle is None:
            handle = self._node_handles[container_id] = functools.partial(self.request_toggle, container_id)
        return handle

    def _original_edges(self) -> list[Edge]:
        return [edge for edge in self._result.edges if not is_decorative(edge)]

    @staticmethod
    def _ignore_toggle(container_id: str) -> None:
        logger.warning("Ignoring toggle of %r before the first recomputation", container_id)


def _with_collapsed(node: Node, collapsed: bool) -> Node:
    return {**node, "data": {**(node.get("data") or {}), "collapsed": collapsed}}

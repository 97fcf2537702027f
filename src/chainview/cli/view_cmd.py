"""Snapshot CLI commands: inspect, ls."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from chainview._common import build_node_map, get_depth, is_container, is_decorative
from chainview.cli._config import ChainviewConfig, load_config
from chainview.cli._format import format_flag, print_json, print_lines, print_table
from chainview.controller import CollapseController
from chainview.events import StructureChangeCallback
from chainview.exceptions import SnapshotError
from chainview.snapshot import Snapshot, load_snapshot


def resolve_snapshot_path(target: str, config: ChainviewConfig) -> Path:
    """Resolve a snapshot given as a file path or a registered name."""
    registered = config.snapshots.get(target)
    if registered is not None:
        return Path(registered)
    return Path(target)


def _load(target: str, config: ChainviewConfig) -> tuple[Path, Snapshot]:
    path = resolve_snapshot_path(target, config)
    try:
        return path, load_snapshot(path)
    except SnapshotError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e


def _build_controller(snapshot: Snapshot, config: ChainviewConfig, changes: list[list[str]]) -> CollapseController:
    return CollapseController(
        snapshot.nodes,
        snapshot.edges,
        event_processors=[StructureChangeCallback(changes.append)],
        group_types=config.group_element_types,
        attach_handles=False,
    )


def _node_rows(controller: CollapseController) -> list[dict[str, Any]]:
    node_map = build_node_map(controller.nodes)
    rows = []
    for node in controller.nodes:
        data = node.get("data") or {}
        row = {
            "id": node["id"],
            "type": node.get("type"),
            "parent": node.get("parentId"),
            "depth": get_depth(node["id"], node_map),
            "hidden": bool(node.get("hidden")),
        }
        if is_container(node):
            row["collapsed"] = bool(data.get("collapsed"))
            row["unit_count"] = data.get("unitCount", 0)
        rows.append(row)
    return rows


def _edge_rows(controller: CollapseController) -> list[dict[str, Any]]:
    rows = []
    for edge in controller.edges:
        data = edge.get("data") or {}
        rows.append(
            {
                "id": edge["id"],
                "source": edge["source"],
                "target": edge["target"],
                "hidden": bool(edge.get("hidden")),
                "decorative": is_decorative(edge),
                "original_edge_id": data.get("originalEdgeId"),
                "expand_container_ids": data.get("expandContainerIds", []),
            }
        )
    return rows


def _print_human(path: Path, controller: CollapseController, changes: list[list[str]]) -> None:
    nodes = _node_rows(controller)
    edges = _edge_rows(controller)
    hidden_edges = sum(1 for e in edges if e["hidden"])
    print(
        f"\nSnapshot: {path} | {len(nodes)} nodes ({len(controller.hidden_node_ids)} hidden)"
        f" | {len(edges)} edges ({hidden_edges} hidden, {len(controller.decorative_edges)} decorative)\n"
    )

    headers = ["Node", "Type", "Parent", "Depth", "Collapsed", "Hidden", "Units"]
    rows = [
        [
            n["id"],
            n["type"] or "—",
            n["parent"] or "—",
            str(n["depth"]),
            format_flag(n["collapsed"]) if "collapsed" in n else "",
            format_flag(n["hidden"]),
            str(n["unit_count"]) if "unit_count" in n else "",
        ]
        for n in nodes
    ]
    print_lines(print_table(headers, rows))

    if edges:
        print()
        headers = ["Edge", "Source", "Target", "Hidden", "Via"]
        rows = [
            [
                e["id"],
                e["source"],
                e["target"],
                format_flag(e["hidden"]),
                ", ".join(e["expand_container_ids"]) if e["decorative"] else "",
            ]
            for e in edges
        ]
        print_lines(print_table(headers, rows))

    for affected in changes:
        print(f"\n  → relayout: {', '.join(affected)}")


def register_commands(app: typer.Typer) -> None:
    """Register snapshot commands on the given Typer app."""

    @app.command("inspect")
    def inspect_cmd(
        target: Annotated[str, typer.Argument(help="Snapshot JSON file or registered name")],
        collapse: Annotated[list[str] | None, typer.Option("--collapse", help="Container to collapse before inspecting")] = None,
        expand: Annotated[list[str] | None, typer.Option("--expand", help="Container to expand before inspecting")] = None,
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
    ):
        """Show which nodes and edges are visible, and the decorative edges drawn."""
        config = load_config()
        path, snapshot = _load(target, config)

        changes: list[list[str]] = []
        controller = _build_controller(snapshot, config, changes)
        for container_id in collapse or []:
            if not controller.is_collapsed(container_id):
                controller.toggle(container_id)
        if expand:
            controller.expand_containers(expand)

        if as_json or output:
            data = {
                "snapshot": str(path),
                "nodes": _node_rows(controller),
                "edges": _edge_rows(controller),
                "structure_changes": changes,
            }
            print_json("inspect", data, output)
            return

        _print_human(path, controller, changes)

    @app.command("ls")
    def ls_cmd(
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    ):
        """List registered snapshots from [tool.chainview.snapshots]."""
        config = load_config()

        if as_json:
            print_json("ls", {"snapshots": config.snapshots})
            return

        if not config.snapshots:
            print("\n  No snapshots registered in pyproject.toml.")
            print("  Add entries under [tool.chainview.snapshots]:")
            print('    [tool.chainview.snapshots]\n    orders = "diagrams/orders.json"')
            return

        rows = [[name, path] for name, path in sorted(config.snapshots.items())]
        print(f"\n  Registered snapshots ({len(config.snapshots)}):\n")
        print_lines(print_table(["Name", "Path"], rows))

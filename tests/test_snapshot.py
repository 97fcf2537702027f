"""Tests for snapshot loading."""

import json

import pytest
from builders import edge, simple_diagram

from chainview.exceptions import SnapshotError
from chainview.snapshot import load_snapshot, parse_snapshot


class TestParseSnapshot:
    def test_valid(self):
        nodes, edges = simple_diagram()
        snapshot = parse_snapshot({"nodes": nodes, "edges": edges})
        assert snapshot.nodes == nodes
        assert snapshot.edges == edges

    def test_edges_optional(self):
        assert parse_snapshot({"nodes": []}).edges == []

    def test_decorative_edges_discarded(self):
        raw = {"nodes": [], "edges": [edge("d", "a", "b", data={"decorative": True})]}
        assert parse_snapshot(raw).edges == []

    @pytest.mark.parametrize(
        "raw, reason",
        [
            ([], "top level"),
            ({}, "'nodes' must be a list"),
            ({"nodes": [], "edges": {}}, "'edges' must be a list"),
            ({"nodes": [{"type": "unit"}]}, "node #0"),
            ({"nodes": [], "edges": [{"id": "e", "source": "a"}]}, "edge #0"),
        ],
    )
    def test_invalid(self, raw, reason):
        with pytest.raises(SnapshotError, match=reason):
            parse_snapshot(raw)


class TestLoadSnapshot:
    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError) as exc_info:
            load_snapshot(tmp_path / "missing.json")
        assert exc_info.value.reason == "file not found"
        assert "missing.json" in str(exc_info.value)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nodes: ")
        with pytest.raises(SnapshotError, match="not valid JSON"):
            load_snapshot(path)

    def test_loads_caller_state(self, tmp_path):
        nodes, edges = simple_diagram(collapsed=True)
        path = tmp_path / "diagram.json"
        path.write_text(json.dumps({"nodes": nodes, "edges": edges}))
        snapshot = load_snapshot(path)
        assert snapshot.nodes == nodes
        assert snapshot.edges == edges


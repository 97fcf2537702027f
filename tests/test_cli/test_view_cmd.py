"""Tests for the inspect and ls CLI commands."""

from __future__ import annotations

import json

import pytest

typer = pytest.importorskip("typer")

from typer.testing import CliRunner  # noqa: E402

from chainview.cli import create_app  # noqa: E402

runner_cli = CliRunner()

NODES = [
    {"id": "A", "type": "container", "data": {"elementType": "container", "collapsed": False}},
    {"id": "B", "type": "unit", "parentId": "A", "data": {"elementType": "script"}},
    {"id": "C", "type": "unit", "data": {"elementType": "script"}},
]
EDGES = [{"id": "E1", "source": "B", "target": "C"}]


@pytest.fixture
def snapshot_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "diagram.json"
    path.write_text(json.dumps({"nodes": NODES, "edges": EDGES}))
    return path


def invoke(*args):
    return runner_cli.invoke(create_app(), list(args))


class TestInspect:
    def test_human_output(self, snapshot_file):
        result = invoke("inspect", str(snapshot_file))
        assert result.exit_code == 0, result.output
        assert "3 nodes (0 hidden)" in result.output
        assert "E1" in result.output

    def test_collapse_option(self, snapshot_file):
        result = invoke("inspect", str(snapshot_file), "--collapse", "A")
        assert result.exit_code == 0, result.output
        assert "3 nodes (1 hidden)" in result.output
        assert "1 decorative" in result.output
        assert "relayout: A" in result.output

    def test_json_output(self, snapshot_file):
        result = invoke("inspect", str(snapshot_file), "--collapse", "A", "--json")
        assert result.exit_code == 0, result.output
        envelope = json.loads(result.output)
        assert envelope["command"] == "inspect"
        data = envelope["data"]
        nodes = {n["id"]: n for n in data["nodes"]}
        assert nodes["B"]["hidden"] is True
        assert nodes["A"]["unit_count"] == 1
        decorative = [e for e in data["edges"] if e["decorative"]]
        assert [(e["source"], e["target"]) for e in decorative] == [("A", "C")]
        assert decorative[0]["expand_container_ids"] == ["A"]
        assert data["structure_changes"] == [["A"]]

    def test_expand_option(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        nodes = [dict(NODES[0], data={"elementType": "container", "collapsed": True}), *NODES[1:]]
        path = tmp_path / "collapsed.json"
        path.write_text(json.dumps({"nodes": nodes, "edges": EDGES}))

        result = invoke("inspect", str(path), "--expand", "A", "--json")
        envelope = json.loads(result.output)
        assert all(not n["hidden"] for n in envelope["data"]["nodes"])
        assert envelope["data"]["structure_changes"] == [["A"]]

    def test_collapse_keeps_collapsed_container(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        nodes = [dict(NODES[0], data={"elementType": "container", "collapsed": True}), *NODES[1:]]
        path = tmp_path / "collapsed.json"
        path.write_text(json.dumps({"nodes": nodes, "edges": EDGES}))

        result = invoke("inspect", str(path), "--collapse", "A", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        container = next(n for n in data["nodes"] if n["id"] == "A")
        assert container["collapsed"] is True
        assert data["structure_changes"] == []

    def test_output_file(self, snapshot_file, tmp_path):
        out = tmp_path / "out.json"
        result = invoke("inspect", str(snapshot_file), "--output", str(out))
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["command"] == "inspect"

    def test_missing_snapshot(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = invoke("inspect", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "file not found" in result.output

    def test_malformed_snapshot(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"edges": []}))
        result = invoke("inspect", str(path))
        assert result.exit_code == 1
        assert "'nodes' must be a list" in result.output

    def test_registered_name(self, snapshot_file, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            f'[tool.chainview.snapshots]\nmain = "{snapshot_file.as_posix()}"\n'
        )
        result = invoke("inspect", "main")
        assert result.exit_code == 0, result.output
        assert "3 nodes" in result.output


class TestLs:
    def test_empty(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        result = invoke("ls")
        assert result.exit_code == 0
        assert "No snapshots registered" in result.output

    def test_lists_registered(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pyproject.toml").write_text('[tool.chainview.snapshots]\norders = "orders.json"\n')
        result = invoke("ls", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["snapshots"] == {"orders": "orders.json"}

"""Tests for cli.py — the branch-canvas command group."""

from __future__ import annotations

import pytest
import yaml
from click.testing import CliRunner

from branch_canvas.cli import main

SNAPSHOT = """\
default_branch: main
nodes: [main, feature-a, feature-b]
edges:
  - {parent: main, child: feature-a}
planning:
  base_branch: main
  tasks:
    - {id: uuid-1, title: Add Auth}
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def snapshot(tmp_path):
    path = tmp_path / "graph.yaml"
    path.write_text(SNAPSHOT)
    return path


class TestLayoutCommand:
    def test_table(self, runner, snapshot):
        result = runner.invoke(main, ["layout", str(snapshot)])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].split() == ["ID", "DEPTH", "CROSS", "X", "Y"]
        assert lines[1].split() == ["main", "0", "0", "40", "40"]
        assert lines[4].endswith("*")
        assert lines[-1] == "canvas 860x296"

    def test_yaml_output(self, runner, snapshot):
        result = runner.invoke(main, ["layout", str(snapshot), "--format", "yaml"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert [n["id"] for n in data["nodes"]] == ["main", "feature-a", "feature-b", "task/add-auth"]
        assert data["nodes"][3]["tentative"] is True

    def test_orientation_override(self, runner, snapshot):
        result = runner.invoke(main, ["layout", str(snapshot), "--format", "yaml", "--orientation", "columns"])
        data = yaml.safe_load(result.output)
        feature_a = data["nodes"][1]
        assert (feature_a["x"], feature_a["y"]) == (320, 40)

    def test_config_file(self, runner, snapshot, tmp_path):
        cfg = tmp_path / "layout.yaml"
        cfg.write_text("padding: 0\n")
        result = runner.invoke(main, ["layout", str(snapshot), "--config", str(cfg), "--format", "yaml"])
        data = yaml.safe_load(result.output)
        assert (data["nodes"][0]["x"], data["nodes"][0]["y"]) == (0, 0)

    def test_bad_config_reported(self, runner, snapshot, tmp_path):
        cfg = tmp_path / "layout.yaml"
        cfg.write_text("node_width: -1\n")
        result = runner.invoke(main, ["layout", str(snapshot), "--config", str(cfg)])
        assert result.exit_code == 1
        assert "node_width must be positive" in result.output

    def test_bad_snapshot_reported(self, runner, tmp_path):
        path = tmp_path / "graph.yaml"
        path.write_text("- not a mapping\n")
        result = runner.invoke(main, ["layout", str(path)])
        assert result.exit_code == 1
        assert "snapshot must be a mapping" in result.output


class TestRenderCommand:
    def test_stdout(self, runner, snapshot):
        result = runner.invoke(main, ["render", str(snapshot)])
        assert result.exit_code == 0, result.output
        assert "<svg" in result.output

    def test_output_file(self, runner, snapshot, tmp_path):
        out = tmp_path / "graph.svg"
        result = runner.invoke(main, ["render", str(snapshot), "-o", str(out), "--selected", "main"])
        assert result.exit_code == 0, result.output
        assert out.read_text().startswith("<svg")


class TestDiffCommand:
    def test_diff(self, runner, tmp_path):
        old = tmp_path / "old.md"
        new = tmp_path / "new.md"
        old.write_text("a\nb\nc")
        new.write_text("a\nc")
        result = runner.invoke(main, ["diff", str(old), str(new)])
        assert result.exit_code == 0, result.output
        assert " a\n-b\n c\n" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["diff", str(tmp_path / "x"), str(tmp_path / "y")])
        assert result.exit_code == 2

"""Snapshot documents — a branch graph plus an optional planning session, on disk.

YAML (JSON parses too)::

    default_branch: main
    nodes:
      - main
      - name: feature/login
        pr: {number: 12, state: OPEN, checks: SUCCESS}
    edges:
      - {parent: main, child: feature/login}
    planning:
      base_branch: feature/login
      tasks:
        - {id: 3f2a9c1e, title: Add session refresh}
      edges: []

Node entries may use ``branchName`` instead of ``name``, as the dashboard's
tree API does; every other key of a node is kept as opaque metadata.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from branch_canvas.graph import BranchEdge, BranchNode, TaskEdge, TaskNode


class SnapshotError(ValueError):
    """Raised when a snapshot document is malformed."""


@dataclass
class GraphSnapshot:
    nodes: list[BranchNode] = field(default_factory=list)
    edges: list[BranchEdge] = field(default_factory=list)
    default_branch: str | None = None
    tasks: list[TaskNode] = field(default_factory=list)
    task_edges: list[TaskEdge] = field(default_factory=list)
    base_branch: str | None = None


def _require(entry: Mapping[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise SnapshotError(f"{where}: missing or non-string {key!r}")
    return value


def _entries(data: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise SnapshotError(f"{where}{key} must be a list")
    return value


def _parse_node(entry: Any, idx: int) -> BranchNode:
    if isinstance(entry, str):
        return BranchNode(name=entry)
    if not isinstance(entry, Mapping):
        raise SnapshotError(f"nodes[{idx}]: expected a name or a mapping")
    meta = dict(entry)
    name = meta.pop("name", None) or meta.pop("branchName", None)
    if not isinstance(name, str) or not name:
        raise SnapshotError(f"nodes[{idx}]: missing or non-string 'name'")
    return BranchNode(name=name, meta=meta)


def _parse_edge(entry: Any, idx: int) -> BranchEdge:
    if not isinstance(entry, Mapping):
        raise SnapshotError(f"edges[{idx}]: expected a mapping")
    where = f"edges[{idx}]"
    designed = entry.get("designed", entry.get("isDesigned", False))
    return BranchEdge(
        parent=_require(entry, "parent", where),
        child=_require(entry, "child", where),
        is_designed=bool(designed),
    )


def _parse_task(entry: Any, idx: int) -> TaskNode:
    if not isinstance(entry, Mapping):
        raise SnapshotError(f"planning.tasks[{idx}]: expected a mapping")
    where = f"planning.tasks[{idx}]"
    branch = entry.get("branch_name", entry.get("branchName"))
    title = entry.get("title")
    if title is not None and not isinstance(title, str):
        raise SnapshotError(f"{where}: non-string 'title'")
    return TaskNode(
        id=str(entry.get("id") or _require(entry, "id", where)),
        title=title or "",
        branch_name=str(branch) if branch else None,
        description=entry.get("description"),
    )


def _parse_task_edge(entry: Any, idx: int) -> TaskEdge:
    if not isinstance(entry, Mapping):
        raise SnapshotError(f"planning.edges[{idx}]: expected a mapping")
    where = f"planning.edges[{idx}]"
    return TaskEdge(parent=_require(entry, "parent", where), child=_require(entry, "child", where))


def parse_snapshot(data: Any) -> GraphSnapshot:
    """Build a snapshot from already-parsed YAML/JSON data."""
    if data is None:
        return GraphSnapshot()
    if not isinstance(data, Mapping):
        raise SnapshotError("snapshot must be a mapping")

    snap = GraphSnapshot(
        nodes=[_parse_node(e, i) for i, e in enumerate(_entries(data, "nodes", ""))],
        edges=[_parse_edge(e, i) for i, e in enumerate(_entries(data, "edges", ""))],
        default_branch=data.get("default_branch", data.get("defaultBranch")),
    )

    planning = data.get("planning")
    if planning is not None:
        if not isinstance(planning, Mapping):
            raise SnapshotError("planning must be a mapping")
        snap.tasks = [_parse_task(e, i) for i, e in enumerate(_entries(planning, "tasks", "planning."))]
        snap.task_edges = [
            _parse_task_edge(e, i) for i, e in enumerate(_entries(planning, "edges", "planning."))
        ]
        snap.base_branch = planning.get("base_branch", planning.get("baseBranch"))
    return snap


def load_snapshot(path: Path) -> GraphSnapshot:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise SnapshotError(f"{path}: invalid YAML: {exc}") from exc
    return parse_snapshot(data)

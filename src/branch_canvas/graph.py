"""Graph model — branch/task node types and the adjacency model used by layout.

The builder turns a flat node list and edge list into a ``networkx.DiGraph``
whose successor order follows edge order. Layout only ever reads the
``GraphModel`` produced here; it never looks at node metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

logger = logging.getLogger(__name__)

# ─── Input Types ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BranchNode:
    """A real branch. ``meta`` carries PR/worktree/ahead-behind data, opaque to layout."""

    name: str
    meta: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class BranchEdge:
    """A parent → child relation between two branches."""

    parent: str
    child: str
    is_designed: bool = False


@dataclass(frozen=True)
class TaskNode:
    """A planned task that has not been promoted to a branch yet."""

    id: str
    title: str
    branch_name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class TaskEdge:
    """A parent → child relation between two tasks (by task id)."""

    parent: str
    child: str


# ─── Graph Model ──────────────────────────────────────────────────────────────


@dataclass
class GraphModel:
    """Adjacency view over one input graph.

    Attributes:
        digraph: Node ids with ``data`` attributes; edges in input order.
        order: Node ids in original input order.
        parent_of: child id → parent id. The last edge wins for DAG children.
        roots: Nodes with no incoming edge, in layout order.
    """

    digraph: nx.DiGraph
    order: list[str]
    parent_of: dict[str, str]
    roots: list[str]

    def children_of(self, node_id: str) -> list[str]:
        if node_id not in self.digraph:
            return []
        return list(self.digraph.successors(node_id))

    @property
    def orphans(self) -> list[str]:
        """Nodes unreachable from every root (isolated cycles), in input order."""
        reachable: set[str] = set(self.roots)
        for root in self.roots:
            reachable |= nx.descendants(self.digraph, root)
        return [n for n in self.order if n not in reachable]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.digraph

    def __len__(self) -> int:
        return len(self.order)


def _build(
    items: Iterable[tuple[str, Any]],
    pairs: Iterable[tuple[str, str, Any]],
    kind: str,
) -> tuple[nx.DiGraph, list[str], dict[str, str]]:
    g: nx.DiGraph = nx.DiGraph()
    order: list[str] = []
    for node_id, data in items:
        if node_id in g:
            logger.debug("Duplicate %s node %r ignored", kind, node_id)
            continue
        g.add_node(node_id, data=data)
        order.append(node_id)

    parent_of: dict[str, str] = {}
    for parent, child, data in pairs:
        if parent not in g or child not in g:
            logger.debug("Dropping dangling %s edge %r -> %r", kind, parent, child)
            continue
        if parent == child:
            logger.debug("Dropping %s self-edge on %r", kind, parent)
            continue
        if not g.has_edge(parent, child):
            g.add_edge(parent, child, data=data)
        parent_of[child] = parent

    return g, order, parent_of


def build_graph_model(
    nodes: Iterable[BranchNode],
    edges: Iterable[BranchEdge],
    default_branch: str | None = None,
) -> GraphModel:
    """Build the real-branch model.

    Roots are ordered with ``default_branch`` first and the rest sorted by
    name. Dangling edges and self-edges are dropped.
    """
    g, order, parent_of = _build(
        ((n.name, n) for n in nodes),
        ((e.parent, e.child, e) for e in edges),
        "branch",
    )
    roots = sorted(
        (n for n in order if g.in_degree(n) == 0),
        key=lambda n: (n != default_branch, n),
    )
    return GraphModel(digraph=g, order=order, parent_of=parent_of, roots=roots)


def build_task_graph(tasks: Iterable[TaskNode], edges: Iterable[TaskEdge]) -> GraphModel:
    """Build the tentative-task model, keyed by task id. Roots keep input order."""
    g, order, parent_of = _build(
        ((t.id, t) for t in tasks),
        ((e.parent, e.child, e) for e in edges),
        "task",
    )
    roots = [n for n in order if g.in_degree(n) == 0]
    return GraphModel(digraph=g, order=order, parent_of=parent_of, roots=roots)

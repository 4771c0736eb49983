"""Tests for graph.py — building the adjacency model from flat node/edge lists."""

from __future__ import annotations

import networkx as nx

from branch_canvas.graph import (
    BranchEdge,
    BranchNode,
    TaskEdge,
    TaskNode,
    build_graph_model,
    build_task_graph,
)

# ─── Helpers ──────────────────────────────────────────────────────────────────


def branches(*names: str) -> list[BranchNode]:
    return [BranchNode(name=n) for n in names]


def edges(*pairs: tuple[str, str]) -> list[BranchEdge]:
    return [BranchEdge(parent=p, child=c) for p, c in pairs]


# ─── GraphModel Tests ─────────────────────────────────────────────────────────


class TestBuildGraphModel:
    def test_empty_input(self):
        """No nodes, no edges — empty roots, empty graph."""
        model = build_graph_model([], [])
        assert model.roots == []
        assert len(model) == 0
        assert model.orphans == []

    def test_children_keep_edge_order(self):
        """children_of lists children in the order their edges were given."""
        model = build_graph_model(
            branches("main", "b", "a", "c"),
            edges(("main", "b"), ("main", "a"), ("main", "c")),
        )
        assert model.children_of("main") == ["b", "a", "c"]
        assert model.children_of("a") == []

    def test_children_of_unknown_node(self):
        model = build_graph_model(branches("main"), [])
        assert model.children_of("nope") == []

    def test_parent_of_last_writer_wins(self):
        """A child with two parents maps to the parent of the last edge."""
        model = build_graph_model(
            branches("main", "a", "b", "c"),
            edges(("main", "a"), ("main", "b"), ("a", "c"), ("b", "c")),
        )
        assert model.parent_of["c"] == "b"
        assert model.parent_of["a"] == "main"

    def test_default_branch_root_first(self):
        """The default branch leads the roots; the rest are sorted by name."""
        model = build_graph_model(branches("zeta", "alpha", "main"), [], default_branch="main")
        assert model.roots == ["main", "alpha", "zeta"]

    def test_roots_sorted_without_default(self):
        model = build_graph_model(branches("zeta", "alpha", "main"), [])
        assert model.roots == ["alpha", "main", "zeta"]

    def test_default_branch_not_a_root(self):
        """If the default branch has a parent it is not hoisted into the roots."""
        model = build_graph_model(
            branches("trunk", "main", "other"),
            edges(("trunk", "main")),
            default_branch="main",
        )
        assert model.roots == ["other", "trunk"]

    def test_dangling_edges_dropped(self):
        """Edges to or from unknown nodes are ignored, not raised."""
        model = build_graph_model(
            branches("main", "a"),
            edges(("main", "ghost"), ("ghost", "a")),
            default_branch="main",
        )
        assert model.digraph.number_of_edges() == 0
        assert model.roots == ["main", "a"]

    def test_self_edge_dropped(self):
        model = build_graph_model(branches("a"), edges(("a", "a")))
        assert model.digraph.number_of_edges() == 0
        assert model.roots == ["a"]

    def test_duplicate_edges_collapse(self):
        model = build_graph_model(branches("main", "a"), edges(("main", "a"), ("main", "a")))
        assert model.children_of("main") == ["a"]

    def test_duplicate_node_kept_once(self):
        model = build_graph_model(branches("main", "main"), [])
        assert model.order == ["main"]

    def test_node_data_attached(self):
        node = BranchNode(name="main", meta={"pr": {"number": 1}})
        model = build_graph_model([node], [])
        assert model.digraph.nodes["main"]["data"] is node

    def test_isolated_cycle_is_orphaned(self):
        """A cycle with no way in has no root; its nodes are reported as orphans."""
        model = build_graph_model(
            branches("main", "a", "b"),
            edges(("a", "b"), ("b", "a")),
            default_branch="main",
        )
        assert model.roots == ["main"]
        assert model.orphans == ["a", "b"]
        assert not nx.is_directed_acyclic_graph(model.digraph)

    def test_isolated_node_is_root_not_orphan(self):
        model = build_graph_model(branches("main", "lonely"), [], default_branch="main")
        assert "lonely" in model.roots
        assert model.orphans == []


class TestBuildTaskGraph:
    def test_roots_keep_input_order(self):
        """Task roots are not sorted: planning order is meaningful."""
        tasks = [TaskNode(id="t2", title="B"), TaskNode(id="t1", title="A")]
        model = build_task_graph(tasks, [])
        assert model.roots == ["t2", "t1"]

    def test_child_task_not_a_root(self):
        tasks = [TaskNode(id="t1", title="A"), TaskNode(id="t2", title="B")]
        model = build_task_graph(tasks, [TaskEdge(parent="t1", child="t2")])
        assert model.roots == ["t1"]
        assert model.children_of("t1") == ["t2"]

    def test_dangling_task_edge_dropped(self):
        tasks = [TaskNode(id="t1", title="A")]
        model = build_task_graph(tasks, [TaskEdge(parent="t1", child="missing")])
        assert model.digraph.number_of_edges() == 0

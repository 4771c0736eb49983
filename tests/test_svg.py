"""Tests for renderers/svg.py — SVG output for a LayoutResult."""

from __future__ import annotations

from branch_canvas.config import LayoutConfig
from branch_canvas.graph import BranchEdge, BranchNode, TaskNode
from branch_canvas.layout import compute_layout
from branch_canvas.renderers import Renderer, SvgRenderer
from branch_canvas.renderers.svg import _edge_path
from branch_canvas.status import CHECK_COLORS, REVIEW_COLORS, TONE_STYLES, CheckStatus, NodeTone, ReviewDecision


def sample(config: LayoutConfig | None = None):
    return compute_layout(
        [
            BranchNode(name="main"),
            BranchNode(name="feat/<x>", meta={"pr": {"number": 1, "state": "OPEN", "checks": "FAILURE"}}),
        ],
        [BranchEdge(parent="main", child="feat/<x>", is_designed=True)],
        "main",
        tentative_nodes=[TaskNode(id="t1", title="Add Auth")],
        tentative_anchor="main",
        config=config,
    )


class TestSvgRenderer:
    def test_satisfies_protocol(self):
        renderer: Renderer = SvgRenderer()
        assert renderer.media_type == "image/svg+xml"

    def test_document_shape(self):
        svg = SvgRenderer().render(sample())
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
        assert svg.endswith("</svg>")
        assert 'width="580" height="296"' in svg

    def test_every_node_present_and_escaped(self):
        svg = SvgRenderer().render(sample())
        assert 'data-id="main"' in svg
        assert 'data-id="feat/&lt;x&gt;"' in svg
        assert 'data-id="task/add-auth"' in svg
        assert ">Add Auth</text>" in svg

    def test_edges_before_nodes(self):
        svg = SvgRenderer().render(sample())
        assert svg.index("<path") < svg.index('class="node"')
        assert svg.count("<path") == 2

    def test_tentative_styling(self):
        svg = SvgRenderer().render(sample())
        assert 'stroke-dasharray="4,4"' in svg
        assert TONE_STYLES[NodeTone.TENTATIVE].fill in svg

    def test_check_badge(self):
        svg = SvgRenderer().render(sample())
        assert CHECK_COLORS[CheckStatus.FAILURE] in svg

    def test_review_badge_only_for_pr_nodes(self):
        svg = SvgRenderer().render(sample())
        assert svg.count(f'fill="{REVIEW_COLORS[ReviewDecision.UNKNOWN]}"') == 1

    def test_selected_highlight(self):
        svg = SvgRenderer().render(sample(), selected="main")
        assert 'stroke="#3b82f6"' in svg

    def test_empty_result(self):
        svg = SvgRenderer().render(compute_layout([], []))
        assert 'viewBox="0 0 400 200"' in svg


class TestEdgePath:
    def test_rows_path_goes_down(self):
        result = sample()
        d, _ = _edge_path(result.edges[0], result.orientation)
        # main at (40, 40), 220x68 → leaves bottom centre (150, 108).
        assert d.startswith("M 150 108 L 150 128")

    def test_columns_path_goes_right(self):
        result = sample(LayoutConfig(axis_orientation="columns"))
        d, _ = _edge_path(result.edges[0], result.orientation)
        # main at (40, 40) → leaves right middle (260, 74).
        assert d.startswith("M 260 74 L 280 74")

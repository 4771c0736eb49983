"""Convenience entry points over snapshots."""

from __future__ import annotations

from branch_canvas.config import LayoutConfig
from branch_canvas.layout import LayoutResult, compute_layout
from branch_canvas.renderers.svg import SvgRenderer
from branch_canvas.snapshot import GraphSnapshot


def layout_snapshot(snapshot: GraphSnapshot, config: LayoutConfig | None = None) -> LayoutResult:
    return compute_layout(
        snapshot.nodes,
        snapshot.edges,
        snapshot.default_branch,
        tentative_nodes=snapshot.tasks,
        tentative_edges=snapshot.task_edges,
        tentative_anchor=snapshot.base_branch,
        config=config,
    )


def render_svg(
    snapshot: GraphSnapshot,
    config: LayoutConfig | None = None,
    selected: str | None = None,
) -> str:
    """Lay out a snapshot and render it as SVG."""
    return SvgRenderer().render(layout_snapshot(snapshot, config), selected=selected)

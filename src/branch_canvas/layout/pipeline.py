"""Full layout pipeline: graph model → tree layout → tentative overlay → LayoutResult."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from branch_canvas.config import EMPTY_CANVAS, MIN_CANVAS_HEIGHT, MIN_CANVAS_WIDTH, LayoutConfig
from branch_canvas.graph import BranchEdge, BranchNode, TaskEdge, TaskNode, build_graph_model
from branch_canvas.layout.tentative import merge_tentative
from branch_canvas.layout.tree import TreeLayoutEngine
from branch_canvas.layout.types import LayoutEdge, LayoutNode, LayoutResult, slot_to_pixels

logger = logging.getLogger(__name__)


def canvas_size(nodes: Sequence[LayoutNode], config: LayoutConfig) -> tuple[float, float]:
    """Furthest node extent plus padding, never smaller than the minimum canvas."""
    if not nodes:
        return EMPTY_CANVAS
    max_x = max(n.x + n.width for n in nodes) + config.padding
    max_y = max(n.y + n.height for n in nodes) + config.padding
    return (max(MIN_CANVAS_WIDTH, max_x), max(MIN_CANVAS_HEIGHT, max_y))


def compute_layout(
    nodes: Sequence[BranchNode],
    edges: Iterable[BranchEdge],
    default_branch: str | None = None,
    tentative_nodes: Iterable[TaskNode] = (),
    tentative_edges: Iterable[TaskEdge] = (),
    tentative_anchor: str | None = None,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Position every branch, then overlay planned tasks under ``tentative_anchor``.

    The result is recomputed from scratch on each call and depends only on
    the arguments, so identical inputs give identical coordinates.
    """
    config = config or LayoutConfig()
    edges = list(edges)
    tentative_nodes = list(tentative_nodes)

    if not nodes and not tentative_nodes:
        width, height = EMPTY_CANVAS
        return LayoutResult([], [], width, height, config.axis_orientation)

    model = build_graph_model(nodes, edges, default_branch)
    engine = TreeLayoutEngine(model)
    _, cursor = engine.run(model.roots)

    layout_nodes: list[LayoutNode] = []
    by_id: dict[str, LayoutNode] = {}
    for slot in engine.slots:
        x, y = slot_to_pixels(slot.depth, slot.cross, config)
        node = LayoutNode(
            id=slot.identity,
            x=x,
            y=y,
            depth=slot.depth,
            cross_index=slot.cross,
            is_tentative=False,
            source=model.digraph.nodes[slot.key]["data"],
            width=config.node_width,
            height=config.node_height,
        )
        layout_nodes.append(node)
        by_id[node.id] = node

    layout_edges: list[LayoutEdge] = []
    for edge in edges:
        source, target = by_id.get(edge.parent), by_id.get(edge.child)
        if source is None or target is None or source is target:
            continue
        layout_edges.append(LayoutEdge(source=source, target=target, is_designed=edge.is_designed))

    if tentative_nodes and tentative_anchor:
        overlay = merge_tentative(
            layout_nodes, tentative_nodes, tentative_edges, tentative_anchor, cursor, config
        )
        layout_nodes.extend(overlay.nodes)
        layout_edges.extend(overlay.edges)
    elif tentative_nodes:
        logger.debug("No tentative anchor given; %d planned task(s) not shown", len(tentative_nodes))

    width, height = canvas_size(layout_nodes, config)
    return LayoutResult(layout_nodes, layout_edges, width, height, config.axis_orientation)

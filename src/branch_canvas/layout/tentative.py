"""Tentative overlay — planned tasks laid out under a base branch.

Tasks share the real graph's coordinate space: they hang one generation
below the anchor branch and continue the cross-axis cursor from where the
real layout stopped, so the two graphs never overlap. A task whose branch
name already exists as a real branch is dropped; the real node wins.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from branch_canvas.config import LayoutConfig
from branch_canvas.graph import TaskEdge, TaskNode, build_task_graph
from branch_canvas.layout.tree import TreeLayoutEngine
from branch_canvas.layout.types import LayoutEdge, LayoutNode, slot_to_pixels

logger = logging.getLogger(__name__)

TASK_BRANCH_PREFIX = "task/"
SLUG_MAX_LEN = 30
ID_FALLBACK_LEN = 8

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-+")


def slugify_title(title: str) -> str:
    """Lowercase, hyphenate whitespace, keep ``[a-z0-9-]``, trim, cap at 30 chars."""
    slug = _WHITESPACE.sub("-", title.lower())
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")[:SLUG_MAX_LEN]


def tentative_branch_name(task: TaskNode) -> str:
    """The branch name a task will be shown under.

    An explicit ``branch_name`` wins. Otherwise ``task/<slug of title>``,
    falling back to the first eight characters of the task id when the
    title slugs to nothing.

    >>> tentative_branch_name(TaskNode(id="uuid-1", title="Add Auth"))
    'task/add-auth'
    """
    if task.branch_name:
        return task.branch_name
    slug = slugify_title(task.title) or task.id[:ID_FALLBACK_LEN]
    return f"{TASK_BRANCH_PREFIX}{slug}"


@dataclass
class Overlay:
    """Nodes and edges contributed by the tentative pass."""

    nodes: list[LayoutNode] = field(default_factory=list)
    edges: list[LayoutEdge] = field(default_factory=list)
    next_cross: int = 0


def merge_tentative(
    real_nodes: list[LayoutNode],
    tasks: Iterable[TaskNode],
    task_edges: Iterable[TaskEdge],
    anchor_id: str,
    cursor: int,
    config: LayoutConfig,
) -> Overlay:
    """Lay out the task graph under ``anchor_id``.

    Args:
        real_nodes: The completed real layout.
        tasks: Planned tasks; identities derived by ``tentative_branch_name``.
        task_edges: Parent → child task relations (by task id).
        anchor_id: Branch the task roots hang from.
        cursor: First free cross slot after the real layout.
        config: Geometry for coordinate conversion.
    """
    model = build_task_graph(tasks, task_edges)
    if not len(model):
        return Overlay(next_cross=cursor)

    by_id: dict[str, LayoutNode] = {n.id: n for n in real_nodes}
    anchor = by_id.get(anchor_id)
    if anchor is None and real_nodes:
        logger.debug("Anchor %r not in layout; using %r", anchor_id, real_nodes[0].id)
        anchor = real_nodes[0]
    depth = anchor.depth + 1 if anchor is not None else 0

    def identity(key: str) -> str:
        return tentative_branch_name(model.digraph.nodes[key]["data"])

    engine = TreeLayoutEngine(model, identity=identity, claimed=by_id)
    started, next_cross = engine.run(model.roots, depth=depth, cursor=cursor)
    for key in model.order:
        if engine.is_suppressed(key):
            logger.debug("Task %r suppressed: %r already exists", key, identity(key))

    placed: dict[str, LayoutNode] = {}
    overlay = Overlay(next_cross=next_cross)
    for slot in engine.slots:
        task: TaskNode = model.digraph.nodes[slot.key]["data"]
        x, y = slot_to_pixels(slot.depth, slot.cross, config)
        node = LayoutNode(
            id=slot.identity,
            x=x,
            y=y,
            depth=slot.depth,
            cross_index=slot.cross,
            is_tentative=True,
            source=task,
            width=config.node_width,
            height=config.tentative_node_height,
        )
        placed[slot.key] = node
        overlay.nodes.append(node)

    if anchor is not None:
        for key in started:
            overlay.edges.append(LayoutEdge(source=anchor, target=placed[key], is_tentative=True))
    for parent, child in model.digraph.edges():
        if parent in placed and child in placed:
            overlay.edges.append(LayoutEdge(source=placed[parent], target=placed[child], is_tentative=True))

    return overlay

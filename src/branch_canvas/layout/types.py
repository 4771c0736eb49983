"""Layout IR — the positioned output of a layout call, consumed by renderers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from branch_canvas.config import AxisOrientation, LayoutConfig
from branch_canvas.graph import BranchNode, TaskNode


@dataclass(frozen=True)
class Point:
    """A 2D point in pixel coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class LayoutNode:
    """A positioned projection of exactly one BranchNode or TaskNode.

    ``depth`` counts generations from the root; ``cross_index`` is the
    sibling slot and may be fractional when a parent is centred over an
    even number of leaf slots.
    """

    id: str
    x: float
    y: float
    depth: int
    cross_index: float
    is_tentative: bool
    source: BranchNode | TaskNode = field(compare=False)
    width: float = 0
    height: float = 0

    @property
    def label(self) -> str:
        if isinstance(self.source, TaskNode):
            return self.source.title
        return self.id


@dataclass(frozen=True)
class LayoutEdge:
    """An edge between two LayoutNodes (parent → child)."""

    source: LayoutNode
    target: LayoutNode
    is_designed: bool = False
    is_tentative: bool = False


@dataclass
class LayoutResult:
    """Everything a renderer needs to draw one graph."""

    nodes: list[LayoutNode]
    edges: list[LayoutEdge]
    canvas_width: float
    canvas_height: float
    orientation: AxisOrientation = AxisOrientation.ROWS

    @property
    def tentative_ids(self) -> set[str]:
        return {n.id for n in self.nodes if n.is_tentative}


# ─── Axis Mapping ─────────────────────────────────────────────────────────────

AxisMapper = Callable[[int, float, LayoutConfig], tuple[float, float]]


def _rows(depth: int, cross: float, cfg: LayoutConfig) -> tuple[float, float]:
    return (cfg.padding + cross * cfg.cross_pitch, cfg.padding + depth * cfg.depth_pitch)


def _columns(depth: int, cross: float, cfg: LayoutConfig) -> tuple[float, float]:
    return (cfg.padding + depth * cfg.depth_pitch, cfg.padding + cross * cfg.cross_pitch)


AXIS_MAPPERS: dict[AxisOrientation, AxisMapper] = {
    AxisOrientation.ROWS: _rows,
    AxisOrientation.COLUMNS: _columns,
}


def slot_to_pixels(depth: int, cross: float, cfg: LayoutConfig) -> tuple[float, float]:
    """Convert a (depth, cross) slot to the top-left (x, y) of its node box."""
    return AXIS_MAPPERS[cfg.axis_orientation](depth, cross, cfg)

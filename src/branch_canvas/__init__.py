"""branch-canvas — layout, reparent gesture and line diff for a branch/task graph."""

from branch_canvas.config import AxisOrientation, ConfigError, LayoutConfig, load_config
from branch_canvas.diff import DiffKind, DiffLine, compute_line_diff
from branch_canvas.graph import BranchEdge, BranchNode, TaskEdge, TaskNode
from branch_canvas.interaction import DragSession, EdgeInteractionController
from branch_canvas.layout import LayoutEdge, LayoutNode, LayoutResult, Point, compute_layout

__all__ = [
    "AxisOrientation",
    "BranchEdge",
    "BranchNode",
    "ConfigError",
    "DiffKind",
    "DiffLine",
    "DragSession",
    "EdgeInteractionController",
    "LayoutConfig",
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "Point",
    "TaskEdge",
    "TaskNode",
    "compute_layout",
    "compute_line_diff",
    "load_config",
]

"""Layout package — slot assignment, tentative overlay and pixel conversion."""

from branch_canvas.layout.pipeline import canvas_size, compute_layout
from branch_canvas.layout.tentative import slugify_title, tentative_branch_name
from branch_canvas.layout.tree import Slot, TreeLayoutEngine
from branch_canvas.layout.types import LayoutEdge, LayoutNode, LayoutResult, Point, slot_to_pixels

__all__ = [
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "Point",
    "Slot",
    "TreeLayoutEngine",
    "canvas_size",
    "compute_layout",
    "slot_to_pixels",
    "slugify_title",
    "tentative_branch_name",
]

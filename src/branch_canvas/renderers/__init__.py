"""Renderers turn a ``LayoutResult`` into an output document."""

from branch_canvas.renderers.base import Renderer
from branch_canvas.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]

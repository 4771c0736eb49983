"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from branch_canvas.layout.types import LayoutResult


class Renderer(Protocol):
    """Anything that can draw a laid-out branch graph.

    ``media_type`` names the produced document (``image/svg+xml``, ...).
    ``selected`` is the branch to highlight, if any.
    """

    media_type: str

    def render(self, result: LayoutResult, selected: str | None = None) -> str: ...

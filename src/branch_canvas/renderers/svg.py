"""SVG renderer — renders a LayoutResult to a standalone SVG document."""

from __future__ import annotations

from branch_canvas.config import AxisOrientation
from branch_canvas.graph import BranchNode
from branch_canvas.layout.types import LayoutEdge, LayoutNode, LayoutResult
from branch_canvas.status import CHECK_COLORS, REVIEW_COLORS, TONE_STYLES, PRInfo, node_tone

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 13
FONT_FAMILY = "monospace"
BACKGROUND = "#111827"
TEXT_COLOR = "#e5e7eb"
MUTED_TEXT = "#9ca3af"
SELECTED_STROKE = "#3b82f6"
EDGE_COLOR = "#4b5563"
DESIGNED_EDGE_COLOR = "#9c27b0"
CORNER_OFFSET = 20  # distance from the parent box to the edge's bend
ARROW = 6


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int = FONT_SIZE) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}"'


def _num(v: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    return f"{v:g}"


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _edge_path(edge: LayoutEdge, orientation: AxisOrientation) -> tuple[str, str]:
    """Return (path d, arrowhead points) for a parent → child edge.

    ROWS: leave the parent's bottom centre, bend below it, enter the child's
    top centre. COLUMNS: the same, transposed onto the right/left sides.
    """
    src, dst = edge.source, edge.target
    if orientation is AxisOrientation.ROWS:
        sx, sy = src.x + src.width / 2, src.y + src.height
        ex, ey = dst.x + dst.width / 2, dst.y
        cy = sy + CORNER_OFFSET
        d = f"M {_num(sx)} {_num(sy)} L {_num(sx)} {_num(cy)} L {_num(ex)} {_num(cy)} L {_num(ex)} {_num(ey)}"
        head = f"{_num(ex)},{_num(ey)} {_num(ex - 4)},{_num(ey - ARROW)} {_num(ex + 4)},{_num(ey - ARROW)}"
    else:
        sx, sy = src.x + src.width, src.y + src.height / 2
        ex, ey = dst.x, dst.y + dst.height / 2
        cx = sx + CORNER_OFFSET
        d = f"M {_num(sx)} {_num(sy)} L {_num(cx)} {_num(sy)} L {_num(cx)} {_num(ey)} L {_num(ex)} {_num(ey)}"
        head = f"{_num(ex)},{_num(ey)} {_num(ex - ARROW)},{_num(ey - 4)} {_num(ex - ARROW)},{_num(ey + 4)}"
    return d, head


def _render_edge(edge: LayoutEdge, orientation: AxisOrientation) -> str:
    d, head = _edge_path(edge, orientation)
    color = DESIGNED_EDGE_COLOR if edge.is_tentative or edge.is_designed else EDGE_COLOR
    width = 2 if edge.is_tentative or edge.is_designed else 1.5
    dash = ' stroke-dasharray="4,4"' if edge.is_tentative else ""
    opacity = ' opacity="0.7"' if edge.is_tentative else ""
    return "\n".join(
        [
            f"<g{opacity}>",
            f'<path d="{d}" fill="none" stroke="{color}" stroke-width="{width}"{dash}/>',
            f'<polygon points="{head}" fill="{color}"/>',
            "</g>",
        ]
    )


# ─── Node Rendering ─────────────────────────────────────────────────────────


def _render_node(node: LayoutNode, selected: bool) -> str:
    style = TONE_STYLES[node_tone(node)]
    stroke = SELECTED_STROKE if selected else style.stroke
    dash = f' stroke-dasharray="{style.dash}"' if style.dash and not selected else ""
    x, y, w, h = node.x, node.y, node.width, node.height
    cx = x + w / 2

    parts = [
        f'<g class="node" data-id="{_escape(node.id)}" opacity="{_num(style.opacity)}">',
        f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" height="{_num(h)}" rx="6" '
        f'fill="{style.fill}" stroke="{stroke}" stroke-width="{2 if selected else 1.5}"{dash}/>',
    ]
    font = _font()
    if node.is_tentative:
        parts.append(
            f'<text x="{_num(cx)}" y="{_num(y + h / 2 - 6)}" text-anchor="middle" {font} '
            f'fill="{TEXT_COLOR}">{_escape(node.label)}</text>'
        )
        parts.append(
            f'<text x="{_num(cx)}" y="{_num(y + h / 2 + 12)}" text-anchor="middle" {_font(FONT_SIZE - 2)} '
            f'fill="{MUTED_TEXT}">{_escape(node.id)}</text>'
        )
    else:
        parts.append(
            f'<text x="{_num(cx)}" y="{_num(y + h / 2)}" dominant-baseline="central" text-anchor="middle" '
            f'{font} fill="{TEXT_COLOR}">{_escape(node.label)}</text>'
        )
        pr = PRInfo.from_meta(node.source.meta) if isinstance(node.source, BranchNode) else None
        if pr is not None:
            parts.append(
                f'<circle cx="{_num(x + w - 10)}" cy="{_num(y + 10)}" r="4" fill="{CHECK_COLORS[pr.checks]}"/>'
            )
            parts.append(
                f'<circle cx="{_num(x + w - 22)}" cy="{_num(y + 10)}" r="4" fill="{REVIEW_COLORS[pr.review]}"/>'
            )
    parts.append("</g>")
    return "\n".join(parts)


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a LayoutResult, produces an SVG string."""

    media_type = "image/svg+xml"

    def render(self, result: LayoutResult, selected: str | None = None) -> str:
        w, h = _num(result.canvas_width), _num(result.canvas_height)
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
            f'<rect width="{w}" height="{h}" fill="{BACKGROUND}"/>',
        ]

        # Edges behind nodes.
        for edge in result.edges:
            parts.append(_render_edge(edge, result.orientation))

        for node in result.nodes:
            parts.append(_render_node(node, node.id == selected))

        parts.append("</svg>")
        return "\n".join(parts)

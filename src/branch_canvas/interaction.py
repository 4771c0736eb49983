"""Edge interaction — drag one branch onto another to reparent it.

The controller is a two-state machine driven by the host's pointer events:

    Idle ──pointer-down on eligible node──▶ Dragging
    Dragging ──pointer-up with hover target──▶ Idle  (emits one commit)
    Dragging ──pointer-up without target / leave surface / teardown──▶ Idle

Direction convention: the drop target becomes the new *parent* of the drag
origin. The commit callback is called as ``on_edge_commit(origin, target)``;
a caller that creates edges does ``create_edge(parent=target, child=origin)``.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from branch_canvas.layout.types import LayoutResult, Point

logger = logging.getLogger(__name__)

EdgeCommitCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class DragSession:
    """State held between one pointer-down and its terminal pointer-up/cancel."""

    origin: str
    origin_pos: Point
    current_pos: Point
    hover_target: str | None = None


class EdgeInteractionController:
    """Pointer-driven reparent gesture, independent of layout and rendering.

    Args:
        on_edge_commit: Called with ``(origin_id, target_id)`` at most once per
            drag session.
        default_branch: Never draggable (it may still be a drop target).
        edit_mode: Drags only start while edit mode is on.
        tentative_ids: Planned-task nodes; neither draggable nor drop targets.
    """

    def __init__(
        self,
        on_edge_commit: EdgeCommitCallback,
        default_branch: str | None = None,
        edit_mode: bool = False,
        tentative_ids: Iterable[str] = (),
    ) -> None:
        self.on_edge_commit = on_edge_commit
        self.default_branch = default_branch
        self.edit_mode = edit_mode
        self.tentative_ids: frozenset[str] = frozenset(tentative_ids)
        self.session: DragSession | None = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    def sync(self, result: LayoutResult) -> None:
        """Pick up the tentative nodes of a freshly computed layout."""
        self.tentative_ids = frozenset(result.tentative_ids)

    def set_edit_mode(self, enabled: bool) -> None:
        self.edit_mode = enabled
        if not enabled:
            self._reset("edit mode disabled")

    def can_drag(self, node_id: str) -> bool:
        return self.edit_mode and node_id != self.default_branch and node_id not in self.tentative_ids

    # ─── Pointer Events ───────────────────────────────────────────────────

    def on_pointer_down(self, node_id: str, pos: Point) -> None:
        if self.session is not None or not self.can_drag(node_id):
            return
        self.session = DragSession(origin=node_id, origin_pos=pos, current_pos=pos)
        logger.debug("Drag started from %r", node_id)

    def on_pointer_move(self, pos: Point) -> None:
        if self.session is not None:
            self.session = dataclasses.replace(self.session, current_pos=pos)

    def on_pointer_enter_node(self, node_id: str) -> None:
        if self.session is None:
            return
        if node_id == self.session.origin or node_id in self.tentative_ids:
            return
        self.session = dataclasses.replace(self.session, hover_target=node_id)

    def on_pointer_leave_node(self, node_id: str) -> None:
        if self.session is not None and self.session.hover_target == node_id:
            self.session = dataclasses.replace(self.session, hover_target=None)

    def on_pointer_up(self) -> None:
        session = self.session
        if session is None:
            return
        self.session = None
        target = session.hover_target
        if target is None or target == session.origin:
            logger.debug("Drag from %r released without a target", session.origin)
            return
        logger.debug("Drag committed: %r onto %r", session.origin, target)
        self.on_edge_commit(session.origin, target)

    def on_pointer_leave_surface(self) -> None:
        self._reset("pointer left surface")

    def teardown(self) -> None:
        self._reset("teardown")

    def _reset(self, reason: str) -> None:
        if self.session is not None:
            logger.debug("Drag from %r cancelled (%s)", self.session.origin, reason)
        self.session = None

"""Tree layout — subtree-width centring over a forest projection of the graph.

Each node gets a generation (depth) and a sibling slot (cross index). A
parent is centred over the leaf slots of its descendants:

    cross(n) = min_cross + (subtree_width(n) - 1) / 2

Siblings are laid out left to right with a running cursor, and roots share
one cursor so separate trees never overlap. A node reachable through several
parents is placed under the first parent that reaches it; later visits are
no-ops. The engine knows nothing about pixels — see ``slot_to_pixels``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from branch_canvas.graph import GraphModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Slot:
    """A placed node: its graph key, its output identity and its (depth, cross) slot."""

    key: str
    identity: str
    depth: int
    cross: float


class TreeLayoutEngine:
    """Assign (depth, cross) slots to the nodes of one ``GraphModel``.

    Args:
        model: The graph to lay out.
        identity: Maps a graph key to the identity the placed node will carry.
            Real branches use their name; tasks use their derived branch name.
        claimed: Identities already taken by an earlier layout pass. A node
            whose identity is claimed is treated as already placed.
    """

    def __init__(
        self,
        model: GraphModel,
        identity: Callable[[str], str] | None = None,
        claimed: Iterable[str] = (),
    ) -> None:
        self.model = model
        self.identity = identity or (lambda key: key)
        self.claimed: set[str] = set(claimed)
        self.slots: list[Slot] = []
        self._placed: set[str] = set()
        self._widths: dict[str, int] = {}

    def is_suppressed(self, key: str) -> bool:
        """True if ``key`` was never placed because its identity was already taken."""
        return key not in self._placed and self.identity(key) in self.claimed

    # ─── Subtree Width ────────────────────────────────────────────────────

    def subtree_width(self, key: str) -> int:
        """Number of leaf slots consumed by ``key`` and its descendants."""
        return self._width(key, set())

    def _width(self, key: str, stack: set[str]) -> int:
        # Depth-first; a child still on the stack closes a cycle and counts
        # for nothing. Every finished node is cached, so each is visited once.
        if key in self._widths:
            return self._widths[key]
        stack.add(key)
        total = sum(self._width(child, stack) for child in self.model.children_of(key) if child not in stack)
        stack.discard(key)
        self._widths[key] = total or 1
        return self._widths[key]

    # ─── Placement ────────────────────────────────────────────────────────

    def layout_subtree(self, key: str, depth: int, min_cross: int) -> int:
        """Place ``key`` and its unplaced descendants; return the next free cross slot."""
        if key in self._placed or key not in self.model:
            return min_cross
        identity = self.identity(key)
        if identity in self.claimed:
            logger.debug("Skipping %r: identity %r already placed", key, identity)
            return min_cross

        cross = min_cross + (self.subtree_width(key) - 1) / 2
        self.slots.append(Slot(key=key, identity=identity, depth=depth, cross=cross))
        self._placed.add(key)
        self.claimed.add(identity)

        cursor = min_cross
        for child in self.model.children_of(key):
            cursor = self.layout_subtree(child, depth + 1, cursor)
        return max(cursor, min_cross + 1)

    def layout_forest(self, roots: Iterable[str], depth: int = 0, cursor: int = 0) -> int:
        """Lay out each root in turn on one shared cursor; return the next free slot."""
        for root in roots:
            cursor = self.layout_subtree(root, depth, cursor)
        return cursor

    def unplaced(self) -> list[str]:
        """Keys not yet placed and not suppressed, in input order."""
        return [k for k in self.model.order if k not in self._placed and not self.is_suppressed(k)]

    def place_orphans(self, depth: int = 0, cursor: int = 0) -> tuple[list[str], int]:
        """Place every still-unplaced node as an extra root.

        Returns the keys that started a new tree and the next free slot.
        """
        started: list[str] = []
        for key in self.unplaced():
            if key in self._placed:
                # Reached from an orphan placed earlier in this loop.
                continue
            logger.debug("Placing unreachable node %r as an extra root", key)
            before = len(self.slots)
            cursor = self.layout_subtree(key, depth, cursor)
            if len(self.slots) > before:
                started.append(key)
        return started, cursor

    def run(self, roots: Iterable[str], depth: int = 0, cursor: int = 0) -> tuple[list[str], int]:
        """Roots first, then orphans. Returns every key that started a tree and the next slot."""
        roots = list(roots)
        cursor = self.layout_forest(roots, depth, cursor)
        orphans, cursor = self.place_orphans(depth, cursor)
        return [r for r in roots if r in self._placed] + orphans, cursor

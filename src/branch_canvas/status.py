"""Typed views over branch metadata, and the rendering tables keyed by them.

Branch metadata arrives as loose strings ("OPEN", "SUCCESS", ...). Each
known vocabulary is an Enum with an explicit ``UNKNOWN`` member, and every
table below is keyed by the Enum and covers all members, so a new variant
cannot silently fall through to a default colour.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from branch_canvas.graph import BranchNode
from branch_canvas.layout.types import LayoutNode

E = TypeVar("E", bound="_Vocabulary")


class _Vocabulary(str, Enum):
    @classmethod
    def parse(cls: type[E], value: object) -> E:
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        return cls("UNKNOWN")


class PRState(_Vocabulary):
    OPEN = "OPEN"
    MERGED = "MERGED"
    CLOSED = "CLOSED"
    UNKNOWN = "UNKNOWN"


class CheckStatus(_Vocabulary):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"


class ReviewDecision(_Vocabulary):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    REVIEW_REQUIRED = "REVIEW_REQUIRED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class PRInfo:
    number: int
    title: str
    state: PRState
    checks: CheckStatus = CheckStatus.UNKNOWN
    review: ReviewDecision = ReviewDecision.UNKNOWN
    is_draft: bool = False

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any]) -> PRInfo | None:
        pr = meta.get("pr")
        if not isinstance(pr, Mapping):
            return None
        return cls(
            number=int(pr.get("number", 0)),
            title=str(pr.get("title", "")),
            state=PRState.parse(pr.get("state")),
            checks=CheckStatus.parse(pr.get("checks")),
            review=ReviewDecision.parse(pr.get("reviewDecision", pr.get("review_decision"))),
            is_draft=bool(pr.get("isDraft", pr.get("is_draft", False))),
        )


@dataclass(frozen=True)
class WorktreeInfo:
    path: str
    dirty: bool = False
    is_active: bool = False

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any]) -> WorktreeInfo | None:
        wt = meta.get("worktree")
        if not isinstance(wt, Mapping):
            return None
        return cls(
            path=str(wt.get("path", "")),
            dirty=bool(wt.get("dirty", False)),
            is_active=bool(wt.get("isActive", wt.get("is_active", False))),
        )


# ─── Node Tones ───────────────────────────────────────────────────────────────


class NodeTone(Enum):
    TENTATIVE = "tentative"
    MERGED = "merged"
    ACTIVE = "active"
    OPEN = "open"
    PLAIN = "plain"


@dataclass(frozen=True)
class NodeStyle:
    fill: str
    stroke: str
    dash: str | None = None
    opacity: float = 1.0


TONE_STYLES: dict[NodeTone, NodeStyle] = {
    NodeTone.TENTATIVE: NodeStyle(fill="#2d1f3d", stroke="#9c27b0", dash="4,4", opacity=0.8),
    NodeTone.MERGED: NodeStyle(fill="#1a1625", stroke="#6b21a8", dash="2,2", opacity=0.6),
    NodeTone.ACTIVE: NodeStyle(fill="#14532d", stroke="#22c55e"),
    NodeTone.OPEN: NodeStyle(fill="#14532d", stroke="#22c55e"),
    NodeTone.PLAIN: NodeStyle(fill="#1f2937", stroke="#4b5563"),
}

CHECK_COLORS: dict[CheckStatus, str] = {
    CheckStatus.SUCCESS: "#22c55e",
    CheckStatus.FAILURE: "#ef4444",
    CheckStatus.PENDING: "#eab308",
    CheckStatus.UNKNOWN: "#6b7280",
}

REVIEW_COLORS: dict[ReviewDecision, str] = {
    ReviewDecision.APPROVED: "#22c55e",
    ReviewDecision.CHANGES_REQUESTED: "#f97316",
    ReviewDecision.REVIEW_REQUIRED: "#a855f7",
    ReviewDecision.UNKNOWN: "#6b7280",
}


def node_tone(node: LayoutNode) -> NodeTone:
    """Pick the tone for a node: tentative, then merged PR, active worktree, open PR."""
    if node.is_tentative or not isinstance(node.source, BranchNode):
        return NodeTone.TENTATIVE
    pr = PRInfo.from_meta(node.source.meta)
    if pr is not None and pr.state is PRState.MERGED:
        return NodeTone.MERGED
    wt = WorktreeInfo.from_meta(node.source.meta)
    if wt is not None and wt.is_active:
        return NodeTone.ACTIVE
    if pr is not None and pr.state is PRState.OPEN:
        return NodeTone.OPEN
    return NodeTone.PLAIN

"""Tests for status.py — metadata vocabularies and the rendering tables keyed by them."""

from __future__ import annotations

import pytest

from branch_canvas.graph import BranchNode, TaskNode
from branch_canvas.layout import LayoutNode
from branch_canvas.status import (
    CHECK_COLORS,
    REVIEW_COLORS,
    TONE_STYLES,
    CheckStatus,
    NodeTone,
    PRInfo,
    PRState,
    ReviewDecision,
    WorktreeInfo,
    node_tone,
)


def layout_node(source, tentative: bool = False) -> LayoutNode:
    name = source.name if isinstance(source, BranchNode) else source.id
    return LayoutNode(id=name, x=0, y=0, depth=0, cross_index=0, is_tentative=tentative, source=source)


class TestVocabularies:
    def test_parse_known(self):
        assert PRState.parse("MERGED") is PRState.MERGED
        assert CheckStatus.parse("failure") is CheckStatus.FAILURE
        assert ReviewDecision.parse("CHANGES_REQUESTED") is ReviewDecision.CHANGES_REQUESTED

    @pytest.mark.parametrize("value", ["SOMETHING_NEW", None, 42, ""])
    def test_parse_unknown(self, value):
        assert PRState.parse(value) is PRState.UNKNOWN
        assert CheckStatus.parse(value) is CheckStatus.UNKNOWN

    def test_tables_are_exhaustive(self):
        assert set(CHECK_COLORS) == set(CheckStatus)
        assert set(REVIEW_COLORS) == set(ReviewDecision)
        assert set(TONE_STYLES) == set(NodeTone)


class TestMetaViews:
    def test_pr_from_meta(self):
        pr = PRInfo.from_meta({"pr": {"number": 7, "title": "T", "state": "OPEN", "checks": "PENDING", "isDraft": True}})
        assert pr == PRInfo(number=7, title="T", state=PRState.OPEN, checks=CheckStatus.PENDING, is_draft=True)

    def test_pr_absent(self):
        assert PRInfo.from_meta({}) is None

    def test_worktree_from_meta(self):
        wt = WorktreeInfo.from_meta({"worktree": {"path": "/wt", "dirty": True, "isActive": True}})
        assert wt == WorktreeInfo(path="/wt", dirty=True, is_active=True)


class TestNodeTone:
    def test_tentative(self):
        assert node_tone(layout_node(TaskNode(id="t", title="x"), tentative=True)) is NodeTone.TENTATIVE

    def test_merged_beats_active_worktree(self):
        meta = {"pr": {"state": "MERGED"}, "worktree": {"path": "/", "isActive": True}}
        assert node_tone(layout_node(BranchNode(name="a", meta=meta))) is NodeTone.MERGED

    def test_active_worktree(self):
        meta = {"worktree": {"path": "/", "isActive": True}}
        assert node_tone(layout_node(BranchNode(name="a", meta=meta))) is NodeTone.ACTIVE

    def test_open_pr(self):
        assert node_tone(layout_node(BranchNode(name="a", meta={"pr": {"state": "OPEN"}}))) is NodeTone.OPEN

    def test_plain(self):
        assert node_tone(layout_node(BranchNode(name="a"))) is NodeTone.PLAIN

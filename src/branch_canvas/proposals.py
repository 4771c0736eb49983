"""Proposals embedded in assistant messages.

Assistant replies may carry machine-readable blocks next to their prose:

    <<INSTRUCTION_EDIT>>
    ...full replacement text of the task instruction...
    <</INSTRUCTION_EDIT>>

    <<TASK>>{"label": "Add login form", "description": "..."}<</TASK>>

An instruction edit is reviewed as a line diff against the current
instruction and then accepted or rejected once.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from branch_canvas.diff import DiffLine, compute_line_diff

logger = logging.getLogger(__name__)

INSTRUCTION_EDIT_RE = re.compile(r"<<INSTRUCTION_EDIT>>(.*?)<</INSTRUCTION_EDIT>>", re.DOTALL)
TASK_RE = re.compile(r"<<TASK>>(.*?)<</TASK>>", re.DOTALL)


class ProposalError(RuntimeError):
    """Raised when resolving a proposal that was already accepted or rejected."""


# ─── Instruction Edits ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class InstructionEdit:
    new_content: str


def extract_instruction_edit(message: str) -> InstructionEdit | None:
    """Return the first instruction-edit block in ``message``, if any."""
    match = INSTRUCTION_EDIT_RE.search(message)
    if match is None:
        return None
    return InstructionEdit(new_content=match.group(1).strip())


def remove_instruction_edit_tags(message: str) -> str:
    """Strip every instruction-edit block, leaving the prose."""
    return INSTRUCTION_EDIT_RE.sub("", message).strip()


class ProposalStatus(str, Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass
class InstructionEditProposal:
    """A proposed replacement for the current instruction text, awaiting review."""

    current: str
    edit: InstructionEdit
    status: ProposalStatus = ProposalStatus.PENDING
    _diff: list[DiffLine] | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_message(cls, current: str, message: str) -> InstructionEditProposal | None:
        edit = extract_instruction_edit(message)
        if edit is None:
            return None
        return cls(current=current, edit=edit)

    @property
    def diff(self) -> list[DiffLine]:
        if self._diff is None:
            self._diff = compute_line_diff(self.current, self.edit.new_content)
        return self._diff

    @property
    def is_pending(self) -> bool:
        return self.status is ProposalStatus.PENDING

    def accept(self) -> str:
        """Mark committed and return the text that replaces the instruction."""
        self._resolve(ProposalStatus.COMMITTED)
        return self.edit.new_content

    def reject(self) -> None:
        self._resolve(ProposalStatus.REJECTED)

    def _resolve(self, status: ProposalStatus) -> None:
        if not self.is_pending:
            raise ProposalError(f"proposal already {self.status.value}")
        self.status = status


# ─── Task Suggestions ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TaskSuggestion:
    label: str
    description: str = ""


def extract_task_suggestions(message: str) -> list[TaskSuggestion]:
    """Parse every task block; blocks without valid JSON or a string label are skipped."""
    suggestions: list[TaskSuggestion] = []
    for match in TASK_RE.finditer(message):
        try:
            parsed = json.loads(match.group(1).strip())
        except json.JSONDecodeError as exc:
            logger.debug("Skipping task block with invalid JSON: %s", exc)
            continue
        if not isinstance(parsed, dict):
            logger.debug("Skipping task block that is not an object")
            continue
        label = parsed.get("label")
        if not label or not isinstance(label, str):
            logger.debug("Skipping task block without a label")
            continue
        description = parsed.get("description") or ""
        suggestions.append(TaskSuggestion(label=label, description=str(description)))
    return suggestions


def remove_task_tags(message: str) -> str:
    return TASK_RE.sub("", message).strip()


def has_task_suggestions(message: str) -> bool:
    return TASK_RE.search(message) is not None

"""Line diff — LCS-based comparison of two text blobs.

This is not a minimal (Myers) diff: when identical lines repeat, the lines
chosen as "unchanged" may differ from what ``git diff`` would pick, but every
output line is accurate.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum


class DiffKind(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


_PREFIX: dict[DiffKind, str] = {
    DiffKind.UNCHANGED: " ",
    DiffKind.ADDED: "+",
    DiffKind.REMOVED: "-",
}


@dataclass(frozen=True)
class DiffLine:
    kind: DiffKind
    content: str

    @property
    def prefix(self) -> str:
        return _PREFIX[self.kind]


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``. The empty string has no lines."""
    return text.split("\n") if text else []


def longest_common_subsequence(a: list[str], b: list[str]) -> list[str]:
    """Classic O(len(a)·len(b)) DP table, backtracked from the bottom-right corner."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    lcs: list[str] = []
    i, j = m, n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            lcs.append(a[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1
    lcs.reverse()
    return lcs


def compute_line_diff(old_text: str, new_text: str) -> list[DiffLine]:
    """Diff two texts line by line.

    Old and new lines are replayed against their LCS: new lines seen before
    each common line are ``added``, old lines that are not the next common
    line are ``removed``, and trailing new lines are ``added``.
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    lcs = longest_common_subsequence(old_lines, new_lines)

    result: list[DiffLine] = []
    old_idx = new_idx = lcs_idx = 0
    while old_idx < len(old_lines) or new_idx < len(new_lines):
        if lcs_idx < len(lcs) and old_idx < len(old_lines) and old_lines[old_idx] == lcs[lcs_idx]:
            while new_idx < len(new_lines) and new_lines[new_idx] != lcs[lcs_idx]:
                result.append(DiffLine(DiffKind.ADDED, new_lines[new_idx]))
                new_idx += 1
            result.append(DiffLine(DiffKind.UNCHANGED, old_lines[old_idx]))
            old_idx += 1
            new_idx += 1
            lcs_idx += 1
        elif old_idx < len(old_lines):
            result.append(DiffLine(DiffKind.REMOVED, old_lines[old_idx]))
            old_idx += 1
        else:
            result.append(DiffLine(DiffKind.ADDED, new_lines[new_idx]))
            new_idx += 1
    return result


def format_diff(lines: list[DiffLine]) -> str:
    """Render diff lines with ``+``/``-``/space prefixes, one per line."""
    return "\n".join(f"{line.prefix}{line.content}" for line in lines)


def diff_stats(lines: list[DiffLine]) -> dict[DiffKind, int]:
    """Count lines per kind; every kind is present in the result."""
    counts = Counter(line.kind for line in lines)
    return {kind: counts.get(kind, 0) for kind in DiffKind}

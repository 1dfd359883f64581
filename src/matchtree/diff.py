"""Edit scripts between two ordered sequences."""

from __future__ import annotations

import difflib
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DiffTag(str, Enum):
    KEEP = "keep"
    INSERT = "insert"
    REMOVE = "remove"


@dataclass(frozen=True)
class DiffOp:
    """One step of an edit script.

    ``REMOVE`` items exist only in the left sequence, ``INSERT`` items only in
    the right one, and ``KEEP`` items in both.
    """

    tag: DiffTag
    item: Any

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag.value, "item": self.item}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiffOp:
        return cls(tag=DiffTag(data["tag"]), item=data["item"])


def _all_hashable(items: Sequence[Any]) -> bool:
    for item in items:
        if not isinstance(item, Hashable):
            return False
        try:
            hash(item)
        except TypeError:
            return False
    return True


def _diff_hashable(left: Sequence[Any], right: Sequence[Any]) -> list[DiffOp]:
    matcher = difflib.SequenceMatcher(None, left, right, autojunk=False)
    ops: list[DiffOp] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            ops.extend(DiffOp(DiffTag.KEEP, item) for item in left[i1:i2])
            continue
        # "replace" is a removal followed by an insertion
        if tag in ("replace", "delete"):
            ops.extend(DiffOp(DiffTag.REMOVE, item) for item in left[i1:i2])
        if tag in ("replace", "insert"):
            ops.extend(DiffOp(DiffTag.INSERT, item) for item in right[j1:j2])
    return ops


def _diff_lcs(left: Sequence[Any], right: Sequence[Any]) -> list[DiffOp]:
    n, m = len(left), len(right)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            if left[i] == right[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])

    ops: list[DiffOp] = []
    i = j = 0
    while i < n and j < m:
        if left[i] == right[j]:
            ops.append(DiffOp(DiffTag.KEEP, left[i]))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            ops.append(DiffOp(DiffTag.REMOVE, left[i]))
            i += 1
        else:
            ops.append(DiffOp(DiffTag.INSERT, right[j]))
            j += 1
    ops.extend(DiffOp(DiffTag.REMOVE, item) for item in left[i:])
    ops.extend(DiffOp(DiffTag.INSERT, item) for item in right[j:])
    return ops


def diff_sequences(left: Sequence[Any], right: Sequence[Any]) -> list[DiffOp]:
    """Compute an edit script turning ``left`` into ``right``.

    Hashable items go through :class:`difflib.SequenceMatcher` (junk
    heuristics disabled); anything else falls back to a longest common
    subsequence table. Both paths are deterministic for equal inputs.
    """
    left = list(left)
    right = list(right)
    if _all_hashable(left) and _all_hashable(right):
        return _diff_hashable(left, right)
    return _diff_lcs(left, right)


def diff_text(left: str, right: str) -> list[DiffOp]:
    """Character diff with consecutive runs of the same tag joined."""
    segments: list[DiffOp] = []
    for op in diff_sequences(left, right):
        if segments and segments[-1].tag == op.tag:
            segments[-1] = DiffOp(op.tag, segments[-1].item + op.item)
        else:
            segments.append(op)
    return segments


def reconstruct_right(ops: Sequence[DiffOp]) -> list[Any]:
    return [op.item for op in ops if op.tag in (DiffTag.KEEP, DiffTag.INSERT)]


def reconstruct_left(ops: Sequence[DiffOp]) -> list[Any]:
    return [op.item for op in ops if op.tag in (DiffTag.KEEP, DiffTag.REMOVE)]

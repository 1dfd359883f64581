"""Formatter interface and wording shared by the renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from matchtree.diff import DiffTag
from matchtree.location import SourceLocation
from matchtree.outcome import CompositeKind, CompositePayload, LeafPayload, MatchOutcome


@dataclass
class ReportContext:
    """Everything a formatter needs besides the outcome itself.

    Attributes:
        location: Where ``expect`` was called, if known.
        negated: Whether the top-level chain step was ``to_not``.
        styling: Emit ANSI styling (text formatter only).
        max_repr: Truncate displayed values longer than this many characters.
    """

    location: SourceLocation | None = None
    negated: bool = False
    styling: bool = False
    max_repr: int | None = None

    @property
    def expr(self) -> str | None:
        return self.location.expr if self.location is not None else None

    def to_dict(self) -> dict[str, Any]:
        location = self.location or SourceLocation()
        return {
            "file": location.file,
            "line": location.line,
            "column": location.column,
            "expr": location.expr,
            "negated": self.negated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportContext:
        return cls(
            location=SourceLocation(
                file=data.get("file"),
                line=data.get("line"),
                column=data.get("column"),
                expr=data.get("expr"),
            ),
            negated=bool(data.get("negated", False)),
        )


class Formatter(ABC):
    """Turns a :class:`MatchOutcome` tree into a report string.

    Formatters never change a verdict and never write anywhere; the
    expectation hands the result to its sink.
    """

    name: str = "formatter"

    @abstractmethod
    def render(self, outcome: MatchOutcome, context: ReportContext) -> str: ...


_COMPOSITE_HEADERS: dict[CompositeKind, tuple[str, str]] = {
    CompositeKind.ALL: (
        "Expected all of these to match:",
        "Expected at least one of these to not match:",
    ),
    CompositeKind.EACH: (
        "Expected all of these to match:",
        "Expected at least one of these to not match:",
    ),
    CompositeKind.ANY: (
        "Expected at least one of these to match:",
        "Expected none of these to match:",
    ),
    CompositeKind.EVERY: (
        "Expected every element to match:",
        "Expected at least one element to not match:",
    ),
    CompositeKind.ELEMENTS: (
        "Expected each element to match its matcher:",
        "Expected at least one element to not match its matcher:",
    ),
    CompositeKind.FIELDS: (
        "Expected all of these fields of {type} to match:",
        "Expected at least one of these fields of {type} to not match:",
    ),
    CompositeKind.ANY_FIELDS: (
        "Expected at least one of these fields of {type} to match:",
        "Expected none of these fields of {type} to match:",
    ),
}


def wanted(outcome: MatchOutcome, want: bool) -> bool:
    """What the outcome's own payload was expected to do.

    ``want`` is what the parent expected of this outcome; a negated outcome
    expects the opposite of its payload.
    """
    return not want if outcome.negated else want


def shown_notes(outcome: MatchOutcome, want: bool) -> list[str]:
    """Notes worth printing: only where the outcome went against ``want``."""
    if outcome.success == want:
        return []
    return list(outcome.notes)


def composite_header(payload: CompositePayload, want: bool) -> str:
    positive, negative = _COMPOSITE_HEADERS[payload.kind]
    header = positive if want else negative
    return header.format(type=payload.type_name or "record")


def leaf_phrase(payload: LeafPayload, want: bool) -> str:
    return payload.positive if want else payload.negative


def child_label(key: str | int) -> str:
    if isinstance(key, int):
        return f"[{key}]"
    return key


def truncate(text: str, max_repr: int | None) -> str:
    if max_repr is None or len(text) <= max_repr:
        return text
    return text[: max(max_repr - 3, 0)] + "..."


def diff_changed(payload: LeafPayload) -> bool:
    return bool(payload.diff) and any(op.tag is not DiffTag.KEEP for op in payload.diff)


@dataclass
class LeafEntry:
    """A leaf of the outcome tree together with how it was reached."""

    path: str
    payload: LeafPayload
    want: bool
    passed: bool
    notes: list[str]


def iter_leaves(
    outcome: MatchOutcome, root: str = "value", want: bool = True
) -> Iterator[LeafEntry]:
    """Walk the outcome tree depth first, yielding every retained leaf.

    ``passed`` tells whether the leaf did what its parent wanted, which is
    what matters for a flat listing. Notes from enclosing ``why`` steps are
    carried down to the leaves.
    """
    yield from _walk(outcome, root, want, [])


def _walk(
    outcome: MatchOutcome, path: str, want: bool, notes: list[str]
) -> Iterator[LeafEntry]:
    notes = [*notes, *shown_notes(outcome, want)]
    inner = wanted(outcome, want)
    payload = outcome.payload
    if isinstance(payload, LeafPayload):
        yield LeafEntry(path, payload, inner, outcome.success == want, notes)
    elif isinstance(payload, CompositePayload):
        for child in payload.children:
            if isinstance(child.key, int):
                child_path = f"{path}[{child.key}]"
            else:
                child_path = f"{path}.{child.key}"
            yield from _walk(child.outcome, child_path, inner, notes)

"""Data structures produced by matchers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from matchtree.diff import DiffOp


class CompositeKind(str, Enum):
    ALL = "all"
    ANY = "any"
    EACH = "each"
    EVERY = "every"
    ELEMENTS = "elements"
    FIELDS = "fields"
    ANY_FIELDS = "any_fields"


@dataclass
class LeafPayload:
    """What a leaf matcher expected and what it found.

    Attributes:
        matcher: Short name of the matcher (e.g. "equal").
        actual: Display text for the value under test.
        positive: Phrase used when the matcher was expected to succeed
            (e.g. "to equal").
        negative: Phrase used when the matcher was expected to fail
            (e.g. "to not equal").
        expected: Display text for the expected value, if the matcher has one.
        diff: Optional edit script from expected to actual.
        diff_kind: "text" for character diffs, "sequence" for element diffs.
    """

    matcher: str
    actual: str
    positive: str
    negative: str
    expected: str | None = None
    diff: list[DiffOp] | None = None
    diff_kind: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "leaf",
            "matcher": self.matcher,
            "actual": self.actual,
            "expected": self.expected,
            "positive": self.positive,
            "negative": self.negative,
            "diff": None if self.diff is None else [op.to_dict() for op in self.diff],
            "diff_kind": self.diff_kind,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeafPayload:
        diff = data.get("diff")
        return cls(
            matcher=data["matcher"],
            actual=data["actual"],
            positive=data["positive"],
            negative=data["negative"],
            expected=data.get("expected"),
            diff=None if diff is None else [DiffOp.from_dict(op) for op in diff],
            diff_kind=data.get("diff_kind"),
        )


@dataclass
class Child:
    """A named (field) or indexed (element/branch) child outcome."""

    key: str | int
    outcome: MatchOutcome


@dataclass
class CompositePayload:
    kind: CompositeKind
    children: list[Child] = field(default_factory=list)
    type_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "composite",
            "kind": self.kind.value,
            "type_name": self.type_name,
            "children": [
                {"key": child.key, "outcome": child.outcome.to_dict()}
                for child in self.children
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompositePayload:
        return cls(
            kind=CompositeKind(data["kind"]),
            type_name=data.get("type_name"),
            children=[
                Child(key=c["key"], outcome=MatchOutcome.from_dict(c["outcome"]))
                for c in data.get("children", [])
            ],
        )


Payload = LeafPayload | CompositePayload


@dataclass
class MatchOutcome:
    """Result of applying one matcher to one value.

    Attributes:
        success: Whether the matcher succeeded, after any negation.
        payload: Diagnostic data; ``None`` for transparent steps.
        negated: Whether the verdict was flipped ("expect NOT" mode).
        notes: Developer annotations, outermost first.
        value: Value handed to the next matcher in a chain. Never serialized.
    """

    success: bool
    payload: Payload | None = None
    negated: bool = False
    notes: list[str] = field(default_factory=list)
    value: Any = None

    @classmethod
    def succeeded(cls, payload: Payload | None, value: Any = None) -> MatchOutcome:
        return cls(success=True, payload=payload, value=value)

    @classmethod
    def failed(cls, payload: Payload | None, value: Any = None) -> MatchOutcome:
        return cls(success=False, payload=payload, value=value)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    def flipped(self, value: Any = None) -> MatchOutcome:
        """Invert the verdict and toggle ``negated``; the payload is kept as is."""
        return replace(
            self,
            success=not self.success,
            negated=not self.negated,
            notes=list(self.notes),
            value=value,
        )

    def annotated(self, note: str) -> MatchOutcome:
        return replace(self, notes=[note, *self.notes])

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "negated": self.negated,
            "notes": list(self.notes),
            "payload": None if self.payload is None else self.payload.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchOutcome:
        raw = data.get("payload")
        payload: Payload | None
        if raw is None:
            payload = None
        elif raw.get("type") == "composite":
            payload = CompositePayload.from_dict(raw)
        elif raw.get("type") == "leaf":
            payload = LeafPayload.from_dict(raw)
        else:
            raise ValueError(f"Unknown payload type: {raw.get('type')!r}")
        return cls(
            success=bool(data["success"]),
            negated=bool(data.get("negated", False)),
            notes=list(data.get("notes", [])),
            payload=payload,
        )

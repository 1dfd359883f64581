"""Equality matcher that records an edit script on mismatch."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from matchtree.diff import diff_sequences, diff_text
from matchtree.matchers.base import SimpleMatcher
from matchtree.outcome import LeafPayload


class DiffMatcher(SimpleMatcher):
    """Like ``equal``, but the report shows what changed.

    Strings are diffed by character and other sequences by element. Elements
    are compared through their ``repr`` so the script can be serialized.
    """

    name = "eq_diff"

    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def matches(self, actual: Any) -> bool:
        return actual == self.expected

    def describe(self, actual: Any) -> LeafPayload:
        payload = LeafPayload(
            matcher=self.name,
            actual=repr(actual),
            expected=repr(self.expected),
            positive="to equal",
            negative="to not equal",
        )
        if isinstance(self.expected, str) and isinstance(actual, str):
            payload.diff = diff_text(self.expected, actual)
            payload.diff_kind = "text"
        elif _is_sequence(self.expected) and _is_sequence(actual):
            payload.diff = diff_sequences(
                [repr(item) for item in self.expected],
                [repr(item) for item in actual],
            )
            payload.diff_kind = "sequence"
        return payload

    def __repr__(self) -> str:
        return f"eq_diff({self.expected!r})"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def eq_diff(expected: Any) -> SimpleMatcher:
    """Succeeds when the value equals ``expected``; failures carry a diff."""
    return DiffMatcher(expected)

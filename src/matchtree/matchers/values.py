"""Leaf matchers for common predicates."""

from __future__ import annotations

import json
import math
import operator
import os
import re
import stat
from collections.abc import Callable, Container, Iterable, Sized
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from matchtree.errors import PreconditionError
from matchtree.matchers.base import SimpleMatcher
from matchtree.outcome import LeafPayload


class ComparisonMatcher(SimpleMatcher):
    """Compares the actual value against an expected value with ``op``."""

    def __init__(
        self,
        name: str,
        expected: Any,
        op: Callable[[Any, Any], bool],
        positive: str,
        negative: str,
    ) -> None:
        self.name = name
        self.expected = expected
        self.op = op
        self.positive = positive
        self.negative = negative

    def matches(self, actual: Any) -> bool:
        return self.op(actual, self.expected)

    def describe(self, actual: Any) -> LeafPayload:
        return LeafPayload(
            matcher=self.name,
            actual=repr(actual),
            expected=repr(self.expected),
            positive=self.positive,
            negative=self.negative,
        )

    def __repr__(self) -> str:
        return f"{self.name}({self.expected!r})"


class MessageMatcher(SimpleMatcher):
    """A matcher without an expected value, described by a phrase."""

    def __init__(
        self,
        name: str,
        predicate: Callable[[Any], bool],
        positive: str,
        negative: str,
        narrow: Callable[[Any], Any] | None = None,
    ) -> None:
        self.name = name
        self.predicate = predicate
        self.positive = positive
        self.negative = negative
        self._narrow = narrow

    def matches(self, actual: Any) -> bool:
        return self.predicate(actual)

    def narrow(self, actual: Any) -> Any:
        if self._narrow is None:
            return actual
        return self._narrow(actual)

    def describe(self, actual: Any) -> LeafPayload:
        return LeafPayload(
            matcher=self.name,
            actual=repr(actual),
            positive=self.positive,
            negative=self.negative,
        )

    def __repr__(self) -> str:
        return f"{self.name}()"


def equal(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher("equal", expected, operator.eq, "to equal", "to not equal")


def be_gt(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher(
        "be_gt", expected, operator.gt, "to be greater than", "to not be greater than"
    )


def be_ge(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher(
        "be_ge",
        expected,
        operator.ge,
        "to be greater than or equal to",
        "to not be greater than or equal to",
    )


def be_lt(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher(
        "be_lt", expected, operator.lt, "to be less than", "to not be less than"
    )


def be_le(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher(
        "be_le",
        expected,
        operator.le,
        "to be less than or equal to",
        "to not be less than or equal to",
    )


def be_in(expected: Container[Any]) -> SimpleMatcher:
    return ComparisonMatcher(
        "be_in", expected, lambda a, e: a in e, "to be in", "to not be in"
    )


def contain(expected: Any) -> SimpleMatcher:
    return ComparisonMatcher(
        "contain", expected, lambda a, e: e in a, "to contain", "to not contain"
    )


def have_len(expected: int) -> SimpleMatcher:
    def _len_eq(actual: Any, length: int) -> bool:
        if not isinstance(actual, Sized):
            raise TypeError(f"object of type {type(actual).__name__} has no len()")
        return len(actual) == length

    return ComparisonMatcher(
        "have_len", expected, _len_eq, "to have length", "to not have length"
    )


def _require_str(actual: Any) -> str:
    if not isinstance(actual, str):
        raise TypeError(f"expected a string, got {type(actual).__name__}")
    return actual


def have_prefix(prefix: str) -> SimpleMatcher:
    return ComparisonMatcher(
        "have_prefix",
        prefix,
        lambda a, e: _require_str(a).startswith(e),
        "to have prefix",
        "to not have prefix",
    )


def have_suffix(suffix: str) -> SimpleMatcher:
    return ComparisonMatcher(
        "have_suffix",
        suffix,
        lambda a, e: _require_str(a).endswith(e),
        "to have suffix",
        "to not have suffix",
    )


def match_regex(pattern: str | re.Pattern[str]) -> SimpleMatcher:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise PreconditionError(f"Invalid regex {pattern!r}: {exc}") from exc
    return ComparisonMatcher(
        "match_regex",
        compiled.pattern,
        lambda a, e: compiled.search(_require_str(a)) is not None,
        "to match the regex",
        "to not match the regex",
    )


def eq_casefold(expected: str) -> SimpleMatcher:
    return ComparisonMatcher(
        "eq_casefold",
        expected,
        lambda a, e: _require_str(a).casefold() == e.casefold(),
        "to equal (ignoring case)",
        "to not equal (ignoring case)",
    )


def approx_eq(expected: float, rel_tol: float = 1e-9, abs_tol: float = 0.0) -> SimpleMatcher:
    def _close(actual: Any, target: float) -> bool:
        return math.isclose(actual, target, rel_tol=rel_tol, abs_tol=abs_tol)

    return ComparisonMatcher(
        "approx_eq",
        expected,
        _close,
        f"to approximately equal (rel_tol={rel_tol}, abs_tol={abs_tol})",
        f"to not approximately equal (rel_tol={rel_tol}, abs_tol={abs_tol})",
    )


def match_json(expected: str | Any) -> SimpleMatcher:
    """Structural equality of JSON documents, ignoring formatting and key order."""

    def _load(document: Any) -> Any:
        if isinstance(document, (str, bytes, bytearray)):
            return json.loads(document)
        return document

    expected_doc = _load(expected)
    return ComparisonMatcher(
        "match_json",
        expected_doc,
        lambda a, e: _load(a) == e,
        "to match the JSON",
        "to not match the JSON",
    )


def be_true() -> SimpleMatcher:
    return MessageMatcher(
        "be_true", lambda a: a is True, "to be true", "to not be true"
    )


def be_false() -> SimpleMatcher:
    return MessageMatcher(
        "be_false", lambda a: a is False, "to be false", "to not be false"
    )


def be_none() -> SimpleMatcher:
    return MessageMatcher("be_none", lambda a: a is None, "to be None", "to not be None")


def be_some() -> SimpleMatcher:
    """Succeeds for anything but ``None``; the chain keeps the unwrapped value."""
    return MessageMatcher(
        "be_some", lambda a: a is not None, "to not be None", "to be None"
    )


def _is_empty(actual: Any) -> bool:
    if not isinstance(actual, Sized):
        raise TypeError(f"object of type {type(actual).__name__} has no len()")
    return len(actual) == 0


def be_empty() -> SimpleMatcher:
    return MessageMatcher("be_empty", _is_empty, "to be empty", "to not be empty")


def be_zero() -> SimpleMatcher:
    return MessageMatcher("be_zero", lambda a: a == 0, "to be zero", "to not be zero")


def be_instance_of(cls: type | tuple[type, ...]) -> SimpleMatcher:
    name = cls.__name__ if isinstance(cls, type) else " | ".join(c.__name__ for c in cls)
    return MessageMatcher(
        "be_instance_of",
        lambda a: isinstance(a, cls),
        f"to be an instance of {name}",
        f"to not be an instance of {name}",
    )


def have_item(key: Any) -> SimpleMatcher:
    """Succeeds when ``actual[key]`` exists; the chain continues with that item."""

    def _has(actual: Any) -> bool:
        try:
            actual[key]
        except (KeyError, IndexError):
            return False
        return True

    return MessageMatcher(
        "have_item",
        _has,
        f"to have item {key!r}",
        f"to not have item {key!r}",
        narrow=lambda a: a[key],
    )


def _items(actual: Any) -> list[Any]:
    if isinstance(actual, (str, bytes)) or not isinstance(actual, Iterable):
        raise TypeError(f"expected a collection, got {type(actual).__name__}")
    return list(actual)


def contain_elements(expected: Iterable[Any]) -> SimpleMatcher:
    """Succeeds when every expected element is in the actual collection."""
    return ComparisonMatcher(
        "contain_elements",
        list(expected),
        lambda a, e: all(item in a for item in e),
        "to contain elements",
        "to not contain elements",
    )


def _same_elements(actual: Any, expected: list[Any]) -> bool:
    remaining = list(expected)
    for item in _items(actual):
        for index, candidate in enumerate(remaining):
            if candidate == item:
                del remaining[index]
                break
        else:
            return False
    return not remaining


def consist_of(expected: Iterable[Any]) -> SimpleMatcher:
    """Succeeds when the actual collection has exactly these elements, in any order.

    Items are compared with ``==``, so unhashable elements are fine and
    duplicates must appear the same number of times.
    """
    return ComparisonMatcher(
        "consist_of",
        list(expected),
        _same_elements,
        "to consist of elements",
        "to not consist of elements",
    )


def _sorted_by(key: Callable[[Any], Any] | None, reverse: bool) -> Callable[[Any], bool]:
    def _check(actual: Any) -> bool:
        keys = [item if key is None else key(item) for item in _items(actual)]
        if reverse:
            return all(a >= b for a, b in zip(keys, keys[1:]))
        return all(a <= b for a, b in zip(keys, keys[1:]))

    return _check


def be_sorted_asc() -> SimpleMatcher:
    return MessageMatcher(
        "be_sorted_asc",
        _sorted_by(None, reverse=False),
        "to be sorted in ascending order",
        "to not be sorted in ascending order",
    )


def be_sorted_desc() -> SimpleMatcher:
    return MessageMatcher(
        "be_sorted_desc",
        _sorted_by(None, reverse=True),
        "to be sorted in descending order",
        "to not be sorted in descending order",
    )


def be_sorted_by(key: Callable[[Any], Any], reverse: bool = False) -> SimpleMatcher:
    """Succeeds when the elements are ordered by ``key`` (descending if ``reverse``)."""
    return MessageMatcher(
        "be_sorted_by",
        _sorted_by(key, reverse),
        "to be sorted by the given key",
        "to not be sorted by the given key",
    )


def _is_default(actual: Any) -> bool:
    try:
        default = type(actual)()
    except TypeError as exc:
        raise TypeError(f"{type(actual).__name__} has no default value") from exc
    return actual == default


def be_default() -> SimpleMatcher:
    """Succeeds when the value equals what its type builds with no arguments."""
    return MessageMatcher(
        "be_default", _is_default, "to be the default value", "to not be the default value"
    )


def approx_eq_time(expected: datetime, threshold: timedelta) -> SimpleMatcher:
    """Succeeds when the actual time is within ``threshold`` of ``expected``."""
    return ComparisonMatcher(
        "approx_eq_time",
        expected,
        lambda a, e: abs(a - e) <= threshold,
        f"to approximately equal (within {threshold})",
        f"to not approximately equal (within {threshold})",
    )


def _file_mode(
    test: Callable[[int], bool] | None, follow_symlinks: bool = True
) -> Callable[[Any], bool]:
    def _check(actual: Any) -> bool:
        if not isinstance(actual, (str, os.PathLike)):
            raise TypeError(f"expected a path, got {type(actual).__name__}")
        path = Path(actual)
        try:
            info = path.stat() if follow_symlinks else path.lstat()
        except FileNotFoundError:
            return False
        return test is None or test(info.st_mode)

    return _check


def be_existing_file() -> SimpleMatcher:
    return MessageMatcher(
        "be_existing_file",
        _file_mode(None),
        "to exist in the filesystem",
        "to not exist in the filesystem",
    )


def be_regular_file() -> SimpleMatcher:
    return MessageMatcher(
        "be_regular_file",
        _file_mode(stat.S_ISREG),
        "to exist and be a regular file",
        "to not be a regular file",
    )


def be_directory() -> SimpleMatcher:
    return MessageMatcher(
        "be_directory",
        _file_mode(stat.S_ISDIR),
        "to exist and be a directory",
        "to not be a directory",
    )


def be_symlink() -> SimpleMatcher:
    """Does not follow the link, unlike the other file matchers."""
    return MessageMatcher(
        "be_symlink",
        _file_mode(stat.S_ISLNK, follow_symlinks=False),
        "to exist and be a symbolic link",
        "to not be a symbolic link",
    )

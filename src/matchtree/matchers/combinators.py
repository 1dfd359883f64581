"""Matchers composed from other matchers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from matchtree.errors import PreconditionError
from matchtree.matchers.base import Matcher, SupportsMatch, ensure_matcher
from matchtree.outcome import Child, CompositeKind, CompositePayload, MatchOutcome

logger = logging.getLogger(__name__)


def _as_list(actual: Any, combinator: str) -> list[Any]:
    if isinstance(actual, (str, bytes)) or not isinstance(actual, Iterable):
        raise PreconditionError(
            f"{combinator} expects an iterable collection, got "
            f"{type(actual).__name__}: {actual!r}"
        )
    return list(actual)


class NotMatcher(Matcher):
    def __init__(self, inner: SupportsMatch) -> None:
        self.inner = ensure_matcher(inner)

    def match(self, actual: Any) -> MatchOutcome:
        return self.inner.match(actual).flipped(value=actual)

    def __repr__(self) -> str:
        return f"not_({self.inner!r})"


class AllMatcher(Matcher):
    """Short-circuiting conjunction.

    Matchers after the first failure are not applied and do not appear in
    the composite payload.
    """

    kind = CompositeKind.ALL

    def __init__(self, matchers: Iterable[SupportsMatch], chained: bool = False) -> None:
        self.matchers = [ensure_matcher(m) for m in matchers]
        self.chained = chained

    def match(self, actual: Any) -> MatchOutcome:
        children: list[Child] = []
        current = actual
        for index, matcher in enumerate(self.matchers):
            outcome = matcher.match(current if self.chained else actual)
            if outcome.payload is not None:
                children.append(Child(index, outcome))
            if outcome.is_failure:
                skipped = len(self.matchers) - index - 1
                if skipped:
                    logger.debug(f"all: stopping after matcher {index}, {skipped} skipped")
                return MatchOutcome.failed(
                    CompositePayload(self.kind, children), value=actual
                )
            if self.chained:
                current = outcome.value
        return MatchOutcome.succeeded(
            CompositePayload(self.kind, children),
            value=current if self.chained else actual,
        )


class EachMatcher(Matcher):
    """Conjunction that applies every matcher, even after a failure."""

    kind = CompositeKind.EACH

    def __init__(self, matchers: Iterable[SupportsMatch]) -> None:
        self.matchers = [ensure_matcher(m) for m in matchers]

    def match(self, actual: Any) -> MatchOutcome:
        children = [Child(i, m.match(actual)) for i, m in enumerate(self.matchers)]
        payload = CompositePayload(self.kind, children)
        if all(child.outcome.is_success for child in children):
            return MatchOutcome.succeeded(payload, value=actual)
        return MatchOutcome.failed(payload, value=actual)


class AnyMatcher(Matcher):
    """Disjunction; every branch is applied so the report can show all of them."""

    kind = CompositeKind.ANY

    def __init__(self, matchers: Iterable[SupportsMatch]) -> None:
        self.matchers = [ensure_matcher(m) for m in matchers]

    def match(self, actual: Any) -> MatchOutcome:
        children = [Child(i, m.match(actual)) for i, m in enumerate(self.matchers)]
        payload = CompositePayload(self.kind, children)
        if any(child.outcome.is_success for child in children):
            return MatchOutcome.succeeded(payload, value=actual)
        return MatchOutcome.failed(payload, value=actual)


class EveryMatcher(Matcher):
    """Applies one matcher to each element of a collection.

    A failed outcome keeps only the failing elements, each under its original
    index. A successful outcome keeps every element.
    """

    kind = CompositeKind.EVERY

    def __init__(self, matcher: SupportsMatch | Callable[[], SupportsMatch]) -> None:
        if isinstance(matcher, SupportsMatch):
            self._factory: Callable[[], SupportsMatch] = lambda: matcher
        elif callable(matcher):
            self._factory = matcher
        else:
            raise PreconditionError(
                f"every expects a matcher or a matcher factory, got {matcher!r}"
            )

    def match(self, actual: Any) -> MatchOutcome:
        items = _as_list(actual, "every")
        children: list[Child] = []
        outputs: list[Any] = []
        for index, item in enumerate(items):
            outcome = ensure_matcher(self._factory()).match(item)
            children.append(Child(index, outcome))
            outputs.append(outcome.value)

        failing = [child for child in children if child.outcome.is_failure]
        if failing:
            logger.debug(
                f"every: {len(failing)} of {len(items)} elements failed "
                f"at {[child.key for child in failing]}"
            )
            return MatchOutcome.failed(CompositePayload(self.kind, failing), value=actual)
        return MatchOutcome.succeeded(CompositePayload(self.kind, children), value=outputs)


class ElementsMatcher(Matcher):
    """Pairs element ``i`` of the input with matcher ``i``."""

    kind = CompositeKind.ELEMENTS

    def __init__(self, matchers: Iterable[SupportsMatch]) -> None:
        self.matchers = [ensure_matcher(m) for m in matchers]

    def match(self, actual: Any) -> MatchOutcome:
        items = _as_list(actual, "match_elements")
        if len(items) != len(self.matchers):
            raise PreconditionError(
                f"match_elements got {len(items)} element(s) but "
                f"{len(self.matchers)} matcher(s)"
            )
        children = [
            Child(i, matcher.match(item))
            for i, (matcher, item) in enumerate(zip(self.matchers, items))
        ]
        payload = CompositePayload(self.kind, children)
        if all(child.outcome.is_success for child in children):
            return MatchOutcome.succeeded(
                payload, value=[child.outcome.value for child in children]
            )
        return MatchOutcome.failed(payload, value=actual)


class WhyMatcher(Matcher):
    """Attaches a note to every outcome of ``inner``.

    The verdict may still be flipped by an enclosing ``not_`` or ``to_not``,
    so the note is kept either way; formatters only show it on nodes that
    went against what was wanted of them.
    """

    def __init__(self, inner: SupportsMatch, reason: str | Callable[[], str]) -> None:
        self.inner = ensure_matcher(inner)
        self.reason = reason

    def match(self, actual: Any) -> MatchOutcome:
        outcome = self.inner.match(actual)
        reason = self.reason() if callable(self.reason) else self.reason
        return outcome.annotated(str(reason))

    def __repr__(self) -> str:
        return f"why({self.inner!r})"


class MapMatcher(Matcher):
    """Transparent step that transforms the value for the rest of a chain."""

    def __init__(self, func: Callable[[Any], Any]) -> None:
        self.func = func

    def match(self, actual: Any) -> MatchOutcome:
        return MatchOutcome.succeeded(None, value=apply_map(self.func, actual))


def apply_map(func: Callable[[Any], Any], actual: Any) -> Any:
    try:
        return func(actual)
    except PreconditionError:
        raise
    except Exception as exc:
        name = getattr(func, "__name__", repr(func))
        raise PreconditionError(f"map function {name} raised {exc!r}") from exc


def not_(matcher: SupportsMatch) -> Matcher:
    """Succeeds when ``matcher`` fails."""
    return NotMatcher(matcher)


def all_(*matchers: SupportsMatch) -> Matcher:
    """Succeeds when every matcher succeeds against the same value.

    Stops at the first failure; later matchers are not applied.
    """
    return AllMatcher(matchers)


def chain(*matchers: SupportsMatch) -> Matcher:
    """Like :func:`all_`, but each matcher receives the previous one's output."""
    return AllMatcher(matchers, chained=True)


def each(*matchers: SupportsMatch) -> Matcher:
    """Succeeds when every matcher succeeds; all of them are always applied."""
    return EachMatcher(matchers)


def any_(*matchers: SupportsMatch) -> Matcher:
    """Succeeds when at least one matcher succeeds; never short-circuits."""
    return AnyMatcher(matchers)


def every(matcher: SupportsMatch | Callable[[], SupportsMatch]) -> Matcher:
    """Succeeds when ``matcher`` succeeds for every element of a collection."""
    return EveryMatcher(matcher)


def match_elements(matchers: Iterable[SupportsMatch]) -> Matcher:
    """Match each element against the matcher at the same position."""
    return ElementsMatcher(matchers)


def why(matcher: SupportsMatch, reason: str) -> Matcher:
    """Attach ``reason`` to the report when ``matcher`` does not do what was wanted."""
    return WhyMatcher(matcher, reason)


def why_lazy(matcher: SupportsMatch, reason: Callable[[], str]) -> Matcher:
    """Like :func:`why`, but ``reason`` is computed when the matcher is applied."""
    return WhyMatcher(matcher, reason)


def map_(func: Callable[[Any], Any]) -> Matcher:
    return MapMatcher(func)

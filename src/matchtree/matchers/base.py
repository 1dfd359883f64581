"""The matcher capability shared by leaf matchers and combinators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from matchtree.errors import PreconditionError
from matchtree.outcome import LeafPayload, MatchOutcome

logger = logging.getLogger(__name__)


@runtime_checkable
class SupportsMatch(Protocol):
    """Anything that can evaluate one value and produce a :class:`MatchOutcome`."""

    def match(self, actual: Any) -> MatchOutcome: ...


class Matcher(ABC):
    """Base class for matchers.

    ``match`` must return a :class:`MatchOutcome` for ordinary successes and
    failures, and raise :class:`PreconditionError` only when the value cannot be
    evaluated at all. A matcher instance may be applied to many values, so it
    must not keep per-application state.
    """

    @abstractmethod
    def match(self, actual: Any) -> MatchOutcome: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SimpleMatcher(Matcher):
    """A leaf matcher defined by a predicate and a description.

    Subclasses implement :meth:`matches` and :meth:`describe`. Comparisons that
    raise ``TypeError`` or ``ValueError`` are treated as a value of the wrong
    shape, and ``OSError`` as a value that cannot be inspected; both surface
    as :class:`PreconditionError`.
    """

    name = "matcher"

    @abstractmethod
    def matches(self, actual: Any) -> bool: ...

    @abstractmethod
    def describe(self, actual: Any) -> LeafPayload: ...

    def narrow(self, actual: Any) -> Any:
        """Value passed down the chain after a success."""
        return actual

    def match(self, actual: Any) -> MatchOutcome:
        try:
            matched = bool(self.matches(actual))
        except (TypeError, ValueError, OSError) as exc:
            logger.warning(f"{self.name} cannot evaluate {actual!r}: {exc}")
            raise PreconditionError(
                f"{self.name} cannot be applied to {type(actual).__name__} "
                f"value {actual!r}: {exc}"
            ) from exc

        logger.debug(f"{self.name} matched={matched} for {actual!r}")
        payload = self.describe(actual)
        if matched:
            return MatchOutcome.succeeded(payload, value=self.narrow(actual))
        return MatchOutcome.failed(payload, value=actual)


class FunctionMatcher(SimpleMatcher):
    """Wrap a plain predicate as a leaf matcher."""

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        positive: str,
        negative: str | None = None,
        name: str = "satisfy",
    ) -> None:
        self.predicate = predicate
        self.positive = positive
        self.negative = negative or f"to not satisfy: {positive}"
        self.name = name

    def matches(self, actual: Any) -> bool:
        return self.predicate(actual)

    def describe(self, actual: Any) -> LeafPayload:
        return LeafPayload(
            matcher=self.name,
            actual=repr(actual),
            positive=self.positive,
            negative=self.negative,
        )

    def __repr__(self) -> str:
        return f"FunctionMatcher({self.positive!r})"


def satisfy(predicate: Callable[[Any], bool], description: str) -> Matcher:
    """Succeeds when ``predicate(actual)`` is truthy."""
    return FunctionMatcher(
        predicate, f"to satisfy: {description}", f"to not satisfy: {description}"
    )


class _CheckedMatcher(Matcher):
    """Wraps an object that only has a ``match`` method and checks its result."""

    def __init__(self, inner: SupportsMatch) -> None:
        self.inner = inner

    def match(self, actual: Any) -> MatchOutcome:
        outcome = self.inner.match(actual)
        if not isinstance(outcome, MatchOutcome):
            raise PreconditionError(
                f"{self.inner!r} is not a matcher: match() returned "
                f"{type(outcome).__name__}, not MatchOutcome"
            )
        return outcome

    def __repr__(self) -> str:
        return repr(self.inner)


def ensure_matcher(candidate: Any) -> SupportsMatch:
    if isinstance(candidate, Matcher):
        return candidate
    if not isinstance(candidate, SupportsMatch):
        raise PreconditionError(
            f"Expected a matcher, got {type(candidate).__name__}: {candidate!r}"
        )
    return _CheckedMatcher(candidate)

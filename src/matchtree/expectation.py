"""The ``expect`` entry point and the assertion chain it returns."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from types import MappingProxyType
from typing import Any

from matchtree.config import MatchtreeConfig
from matchtree.errors import ExpectationClosedError, PreconditionError
from matchtree.location import SourceLocation, caller_location
from matchtree.matchers.base import SupportsMatch, ensure_matcher
from matchtree.matchers.combinators import apply_map
from matchtree.outcome import MatchOutcome
from matchtree.sink import Reporter

logger = logging.getLogger(__name__)


class ExpectationState(str, Enum):
    OPEN = "open"
    TERMINATED = "terminated"


def _read_only(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType(value)
    if isinstance(value, list):
        return tuple(value)
    if isinstance(value, set):
        return frozenset(value)
    return value


class Expectation:
    """An assertion chain over a single value.

    Each successful step narrows the held value to the matcher's output and
    returns the same object. The first failure renders a report, terminates
    the chain, and raises; any later call raises
    :class:`ExpectationClosedError`.
    """

    def __init__(
        self,
        value: Any,
        location: SourceLocation | None = None,
        reporter: Reporter | None = None,
        parent: Expectation | None = None,
    ) -> None:
        self._value = value
        self._location = location or SourceLocation()
        self._reporter = reporter or Reporter.from_config()
        self._parent = parent
        self._outcome: MatchOutcome | None = None
        self._state = ExpectationState.OPEN

    @property
    def location(self) -> SourceLocation:
        return self._location

    @property
    def outcome(self) -> MatchOutcome | None:
        """The most recent outcome, or ``None`` before the first step."""
        return self._outcome

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    @property
    def state(self) -> ExpectationState:
        if self._parent is not None and self._parent.state is ExpectationState.TERMINATED:
            return ExpectationState.TERMINATED
        return self._state

    @property
    def is_terminated(self) -> bool:
        return self.state is ExpectationState.TERMINATED

    def to(self, matcher: SupportsMatch) -> Expectation:
        """Apply ``matcher``; on failure report and raise."""
        return self._apply(matcher, negate=False)

    def to_not(self, matcher: SupportsMatch) -> Expectation:
        """Apply ``matcher`` and require it to fail."""
        return self._apply(matcher, negate=True)

    def map(self, func: Callable[[Any], Any]) -> Expectation:
        """Replace the held value with ``func(value)``."""
        self._check_open()
        self._value = self._guard(lambda: apply_map(func, self._value))
        return self

    def iter_map(self, func: Callable[[Any], Any]) -> Expectation:
        """Replace the held collection with ``[func(item) for item in value]``."""
        self._check_open()

        def _map_items() -> list[Any]:
            if isinstance(self._value, (str, bytes)) or not isinstance(
                self._value, Iterable
            ):
                raise PreconditionError(
                    f"iter_map expects an iterable collection, got "
                    f"{type(self._value).__name__}: {self._value!r}"
                )
            return [apply_map(func, item) for item in self._value]

        self._value = self._guard(_map_items)
        return self

    def view(self, func: Callable[[Any], Any] | None = None) -> Expectation:
        """A child expectation over ``func(value)`` (or the value itself).

        Lists, dicts and sets are handed over read-only. A failure in the child
        terminates this expectation too, and a terminated parent closes the
        child.
        """
        self._check_open()
        target = self._value
        if func is not None:
            target = self._guard(lambda: apply_map(func, self._value))
        return Expectation(
            _read_only(target),
            location=self._location,
            reporter=self._reporter,
            parent=self,
        )

    def into_inner(self) -> Any:
        """The current (possibly narrowed) value."""
        self._check_open()
        return self._value

    def _check_open(self) -> None:
        if self.is_terminated:
            raise ExpectationClosedError(
                f"Expectation at {str(self._location) or 'unknown location'} is already terminated"
            )

    def _terminate(self) -> None:
        self._state = ExpectationState.TERMINATED
        if self._parent is not None:
            self._parent._terminate()

    def _guard(self, step: Callable[[], Any]) -> Any:
        try:
            return step()
        except Exception:
            # Fatal at this point; nothing is rendered.
            self._terminate()
            raise

    def _apply(self, matcher: SupportsMatch, negate: bool) -> Expectation:
        self._check_open()
        matcher = self._guard(lambda: ensure_matcher(matcher))
        outcome = self._guard(lambda: matcher.match(self._value))
        if negate:
            outcome = outcome.flipped(value=self._value)
        self._outcome = outcome

        if outcome.is_success:
            self._value = outcome.value
            logger.debug(f"{matcher!r} passed at {self._location}")
            return self

        self._terminate()
        self._reporter.fail(outcome, self._location, negated=negate)


def expect(value: Any, *, config: MatchtreeConfig | None = None) -> Expectation:
    """Start an assertion chain over ``value``.

    The call site and the expression text are captured for the report
    header. ``config`` overrides the process-wide configuration for this
    chain only.
    """
    return Expectation(
        value,
        location=caller_location(depth=2, func_name="expect"),
        reporter=Reporter.from_config(config),
    )


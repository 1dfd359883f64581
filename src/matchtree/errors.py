"""Exception types raised by expectations and matchers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from matchtree.location import SourceLocation
    from matchtree.outcome import MatchOutcome


class PreconditionError(Exception):
    """A matcher or expectation was used incorrectly.

    Raised for programmer errors such as applying a narrowing matcher to a
    value of the wrong shape, zipping collections of different lengths, or
    reusing an expectation after it failed. These never flow into a
    diagnostic report.
    """


class ExpectationClosedError(PreconditionError):
    """An expectation was used after its chain terminated."""


class AssertionFailure(AssertionError):
    """An assertion chain failed.

    Attributes:
        report: The rendered report, in whatever format was configured.
        outcome: The outcome tree that caused the failure.
        location: Where ``expect`` was called, when known.
    """

    def __init__(
        self,
        report: str,
        outcome: MatchOutcome,
        location: SourceLocation | None = None,
    ) -> None:
        super().__init__(report)
        self.report = report
        self.outcome = outcome
        self.location = location

"""Where reports go, and how a failure is signalled to the caller."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import NoReturn

from matchtree.config import FailurePolicy, MatchtreeConfig, get_config
from matchtree.errors import AssertionFailure
from matchtree.location import SourceLocation
from matchtree.outcome import MatchOutcome
from matchtree.reporting import Formatter, ReportContext, get_formatter

logger = logging.getLogger(__name__)


class Sink(ABC):
    @abstractmethod
    def write(self, report: str) -> None: ...


class StreamSink(Sink):
    """Writes to ``sys.stderr`` or ``sys.stdout``, looked up at write time."""

    def __init__(self, stream_name: str = "stderr") -> None:
        if stream_name not in ("stderr", "stdout"):
            raise ValueError(f"Unknown stream: {stream_name!r}")
        self.stream_name = stream_name

    def write(self, report: str) -> None:
        stream = getattr(sys, self.stream_name)
        stream.write(report.rstrip("\n") + "\n")
        stream.flush()


class NullSink(Sink):
    def write(self, report: str) -> None:
        pass


class FileSink(Sink):
    """Appends each report to a file, separated by blank lines."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, report: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(report.rstrip("\n") + "\n\n")


def get_sink(spec: str) -> Sink:
    if spec in ("stderr", "stdout"):
        return StreamSink(spec)
    if spec == "none":
        return NullSink()
    return FileSink(Path(spec))


class Reporter:
    """Renders a failed outcome, writes it to a sink, and raises the failure signal."""

    def __init__(
        self,
        formatter: Formatter,
        sink: Sink,
        on_failure: FailurePolicy = FailurePolicy.RAISE,
        exit_code: int = 1,
        styling: bool = False,
        max_repr: int | None = None,
    ) -> None:
        self.formatter = formatter
        self.sink = sink
        self.on_failure = on_failure
        self.exit_code = exit_code
        self.styling = styling
        self.max_repr = max_repr

    @classmethod
    def from_config(cls, config: MatchtreeConfig | None = None) -> Reporter:
        config = config or get_config()
        return cls(
            formatter=get_formatter(config.formatter.value),
            sink=get_sink(config.sink),
            on_failure=config.on_failure,
            exit_code=config.exit_code,
            styling=config.styling,
            max_repr=config.max_repr,
        )

    def render(
        self,
        outcome: MatchOutcome,
        location: SourceLocation | None = None,
        negated: bool = False,
    ) -> str:
        context = ReportContext(
            location=location,
            negated=negated,
            styling=self.styling,
            max_repr=self.max_repr,
        )
        return self.formatter.render(outcome, context)

    def fail(
        self,
        outcome: MatchOutcome,
        location: SourceLocation | None = None,
        negated: bool = False,
    ) -> NoReturn:
        report = self.render(outcome, location, negated)
        logger.info(f"Expectation failed at {str(location or '') or 'unknown location'}")
        self.sink.write(report)

        if self.on_failure is FailurePolicy.EXIT:
            logger.info(f"Exiting with status {self.exit_code}")
            raise SystemExit(self.exit_code)
        raise AssertionFailure(report, outcome, location)

"""Machine-readable JSON reports."""

from __future__ import annotations

import json
from pathlib import Path

from matchtree.outcome import MatchOutcome
from matchtree.reporting.base import Formatter, ReportContext

REPORT_VERSION = 1


class JsonFormatter(Formatter):
    """Serializes the whole outcome tree; :func:`load_report` reads it back."""

    name = "json"

    def render(self, outcome: MatchOutcome, context: ReportContext) -> str:
        document = {
            "version": REPORT_VERSION,
            "context": context.to_dict(),
            "outcome": outcome.to_dict(),
        }
        return json.dumps(document, indent=2, ensure_ascii=False)


def parse_report(text: str) -> tuple[MatchOutcome, ReportContext]:
    document = json.loads(text)
    if not isinstance(document, dict) or "outcome" not in document:
        raise ValueError("Not a matchtree JSON report: missing 'outcome'")
    version = document.get("version", REPORT_VERSION)
    if version != REPORT_VERSION:
        raise ValueError(f"Unsupported report version: {version!r}")
    context = ReportContext.from_dict(document.get("context") or {})
    return MatchOutcome.from_dict(document["outcome"]), context


def load_report(path: Path) -> tuple[MatchOutcome, ReportContext]:
    """Load a report written by :class:`JsonFormatter`."""
    return parse_report(path.read_text(encoding="utf-8"))

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from matchtree.outcome import CompositePayload, LeafPayload, MatchOutcome
from matchtree.reporting.base import (
    Formatter,
    ReportContext,
    child_label,
    composite_header,
    diff_changed,
    leaf_phrase,
    shown_notes,
    truncate,
    wanted,
)


def _leaf_view(payload: LeafPayload, want: bool, max_repr: int | None) -> dict[str, Any]:
    diff: list[dict[str, str]] = []
    if diff_changed(payload):
        diff = [{"tag": op.tag.value, "item": str(op.item)} for op in payload.diff or []]
    return {
        "type": "leaf",
        "matcher": payload.matcher,
        "actual": truncate(payload.actual, max_repr),
        "expected": None
        if payload.expected is None
        else truncate(payload.expected, max_repr),
        "phrase": leaf_phrase(payload, want),
        "diff": diff,
        "diff_kind": payload.diff_kind,
    }


def _view(outcome: MatchOutcome, want: bool, max_repr: int | None) -> dict[str, Any]:
    """Flatten an outcome into plain dicts the template can walk."""
    inner = wanted(outcome, want)
    node: dict[str, Any] = {"notes": shown_notes(outcome, want), "type": "empty"}
    payload = outcome.payload
    if isinstance(payload, LeafPayload):
        node.update(_leaf_view(payload, inner, max_repr))
    elif isinstance(payload, CompositePayload):
        node["type"] = "composite"
        node["header"] = composite_header(payload, inner)
        node["children"] = [
            {
                "label": child_label(child.key),
                "matched": child.outcome.is_success,
                "node": _view(child.outcome, inner, max_repr)
                if child.outcome.success != inner
                else None,
            }
            for child in payload.children
        ]
    return node


class HtmlFormatter(Formatter):
    """Self-contained HTML page rendered from ``templates/report.html.j2``."""

    name = "html"

    def __init__(self) -> None:
        tmpl_dir = Path(__file__).parent / "templates"
        self.env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)

    def render(self, outcome: MatchOutcome, context: ReportContext) -> str:
        template = self.env.get_template("report.html.j2")
        location = context.location
        return template.render(
            title=str(location) if location and str(location) else "matchtree report",
            position=location.position() if location else None,
            expr=context.expr,
            success=outcome.success,
            negated=context.negated,
            root=_view(outcome, True, context.max_repr),
        )

"""Human-readable, indented text reports."""

from __future__ import annotations

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
from matchtree.reporting.style import INDENT, INFO_SYMBOL, Style


class TextFormatter(Formatter):
    """Renders the outcome tree as indented text.

    Composite nodes list every retained child with a ``MATCHED``/``FAILED``
    tag; only the children that went against expectations are expanded.
    """

    name = "text"

    def render(self, outcome: MatchOutcome, context: ReportContext) -> str:
        style = Style(context.styling)
        lines: list[str] = []
        if context.location is not None and str(context.location):
            lines.append(style.header(str(context.location)))
        self._node(outcome, True, 0, lines, style, context)
        return "\n".join(lines)

    def _node(
        self,
        outcome: MatchOutcome,
        want: bool,
        depth: int,
        lines: list[str],
        style: Style,
        context: ReportContext,
    ) -> None:
        pad = INDENT * depth
        inner = wanted(outcome, want)
        for note in shown_notes(outcome, want):
            lines.append(pad + style.info(f"{INFO_SYMBOL} {note}"))

        payload = outcome.payload
        if isinstance(payload, LeafPayload):
            self._leaf(payload, inner, pad, lines, style, context)
        elif isinstance(payload, CompositePayload):
            lines.append(pad + style.header(composite_header(payload, inner)))
            for child in payload.children:
                label = child_label(child.key)
                lines.append(
                    f"{pad}{INDENT}{label}: {style.status(child.outcome.is_success)}"
                )
                if child.outcome.success != inner:
                    self._node(child.outcome, inner, depth + 2, lines, style, context)

    def _leaf(
        self,
        payload: LeafPayload,
        want: bool,
        pad: str,
        lines: list[str],
        style: Style,
        context: ReportContext,
    ) -> None:
        actual = style.value(truncate(payload.actual, context.max_repr))
        if payload.diff is not None and payload.expected is not None:
            expected = style.value(truncate(payload.expected, context.max_repr))
            title = "Expected these to be equal:" if want else "Expected these to not be equal:"
            lines.append(pad + style.header(title))
            lines.append(f"{pad}{INDENT}expected: {expected}")
            lines.append(f"{pad}{INDENT}actual:   {actual}")
            if diff_changed(payload):
                self._diff(payload, pad, lines, style)
            return

        lines.append(pad + "Expected:")
        lines.append(pad + INDENT + actual)
        phrase = leaf_phrase(payload, want)
        if payload.expected is None:
            lines.append(pad + phrase)
            return
        lines.append(f"{pad}{phrase}:")
        lines.append(pad + INDENT + style.value(truncate(payload.expected, context.max_repr)))

    def _diff(
        self, payload: LeafPayload, pad: str, lines: list[str], style: Style
    ) -> None:
        ops = payload.diff or []
        if payload.diff_kind == "text":
            joined = "".join(style.segment(op.tag, str(op.item)) for op in ops)
            lines.append(f"{pad}{INDENT}diff:     {joined}")
            return
        lines.append(f"{pad}{INDENT}diff:")
        for op in ops:
            lines.append(f"{pad}{INDENT}{INDENT}{style.gutter(op.tag, str(op.item))}")


def render_leaf_text(payload: LeafPayload, want: bool) -> str:
    """Plain text for a single leaf, used where a whole tree is not wanted."""
    lines: list[str] = []
    TextFormatter()._leaf(payload, want, "", lines, Style(False), ReportContext())
    return "\n".join(lines)

"""Terminal styling and the fixed vocabulary of text reports."""

from __future__ import annotations

from matchtree.diff import DiffTag

# ANSI color codes
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

INDENT = "    "
INFO_SYMBOL = "\U0001f6c8"
MATCHED = "MATCHED"
FAILED = "FAILED"


class Style:
    """Wraps text in ANSI codes when enabled, otherwise returns it unchanged."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def paint(self, text: str, *codes: str) -> str:
        if not self.enabled or not text:
            return text
        return f"{''.join(codes)}{text}{RESET}"

    def header(self, text: str) -> str:
        return self.paint(text, BOLD)

    def info(self, text: str) -> str:
        return self.paint(text, CYAN)

    def value(self, text: str) -> str:
        return self.paint(text, YELLOW)

    def status(self, success: bool) -> str:
        if success:
            return self.paint(MATCHED, GREEN, BOLD)
        return self.paint(FAILED, RED, BOLD)

    def segment(self, tag: DiffTag, text: str) -> str:
        """Inline diff segment; unstyled output uses wdiff markers."""
        if tag is DiffTag.KEEP:
            return text
        if self.enabled:
            return self.paint(text, GREEN if tag is DiffTag.INSERT else RED)
        if tag is DiffTag.INSERT:
            return f"{{+{text}+}}"
        return f"[-{text}-]"

    def gutter(self, tag: DiffTag, text: str) -> str:
        """One element of a sequence diff with a ``+``/``-`` gutter."""
        if tag is DiffTag.INSERT:
            return self.paint(f"+ {text}", GREEN)
        if tag is DiffTag.REMOVE:
            return self.paint(f"- {text}", RED)
        return f"  {text}"

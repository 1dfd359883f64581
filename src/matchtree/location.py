"""Capture where an assertion was made, for report headers."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceLocation:
    file: str | None = None
    line: int | None = None
    column: int | None = None
    expr: str | None = None

    def position(self) -> str | None:
        if self.file is None:
            return None
        parts = [self.file]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)

    def __str__(self) -> str:
        position = self.position()
        if position and self.expr:
            return f"[{position}] = {self.expr}"
        return position or self.expr or ""


def _call_argument(source: str, func_name: str) -> str | None:
    """Return the text between the parentheses of ``func_name(...)``.

    Only the first positional argument is returned; keyword arguments after a
    top-level comma are dropped.
    """
    start = source.find(f"{func_name}(")
    if start < 0:
        return None
    i = start + len(func_name) + 1
    depth = 0
    quote: str | None = None
    arg_start = i
    while i < len(source):
        ch = source[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            if depth == 0:
                return source[arg_start:i].strip() or None
            depth -= 1
        elif ch == "," and depth == 0:
            return source[arg_start:i].strip() or None
        i += 1
    return None


def _relative(path: str) -> str:
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return path


def caller_location(depth: int = 2, func_name: str = "expect") -> SourceLocation:
    """Describe the call site ``depth`` frames above this function."""
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                return SourceLocation()
            frame = frame.f_back
        if frame is None:
            return SourceLocation()
        info = inspect.getframeinfo(frame, context=1)
    finally:
        del frame

    column = None
    if info.positions is not None and info.positions.col_offset is not None:
        column = info.positions.col_offset + 1

    expr = None
    if info.code_context:
        expr = _call_argument("".join(info.code_context), func_name)

    return SourceLocation(
        file=_relative(info.filename),
        line=info.lineno,
        column=column,
        expr=expr,
    )

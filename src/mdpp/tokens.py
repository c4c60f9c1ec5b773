"""Source positions and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


START = Position(1, 1, 0)


def is_name_char(ch: str) -> bool:
    """Return True if ch may appear in a function name."""
    return ch.isalnum()

"""Segmenter — splits source text into literal text and {{...}} call nodes."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from mdpp.ast import Call, Document, Node, Text
from mdpp.errors import CallParseError
from mdpp.parser import parse_call
from mdpp.tokens import START, Position, Span


class _State(Enum):
    IN_TEXT = auto()
    IN_CALL = auto()


class Segmenter:
    """Split a document into Text and Call nodes.

    ``{{`` and ``}}`` are only recognised as a pair of consecutive braces;
    there is no escape for a literal ``{{`` in running text. Whatever is
    buffered at end of input becomes a final Text node, even when empty or
    when a call was left open.
    """

    def __init__(self, source: str, origin: str | Path = "input.md") -> None:
        self._source = source
        self._origin = Path(origin)
        self._pos = 0
        self._line = 1
        self._col = 1
        self._state = _State.IN_TEXT
        self._buf: list[str] = []
        self._buf_start = START
        self._call_start = START
        self._prev = START
        self._nodes: list[Node] = []

    def segment(self) -> Document:
        """Segment the full source and return the document."""
        for ch in self._source:
            here = self._current_pos()
            self._advance(ch)

            if self._state == _State.IN_TEXT and ch == "{" and self._ends_with("{"):
                self._buf.pop()
                # Text ends where the first brace of the pair begins
                self._push_text(self._prev)
                self._call_start = self._prev
                self._state = _State.IN_CALL
                self._reset()
            elif self._state == _State.IN_CALL and ch == "}" and self._ends_with("}"):
                self._buf.pop()
                self._push_call()
                self._state = _State.IN_TEXT
                self._reset()
            else:
                self._buf.append(ch)

            self._prev = here

        self._push_text(self._current_pos())
        return Document(tuple(self._nodes))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _advance(self, ch: str) -> None:
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1

    # ------------------------------------------------------------------
    # Buffer handling
    # ------------------------------------------------------------------

    def _ends_with(self, ch: str) -> bool:
        return bool(self._buf) and self._buf[-1] == ch

    def _reset(self) -> None:
        self._buf = []
        self._buf_start = self._current_pos()

    def _push_text(self, end: Position) -> None:
        content = "".join(self._buf)
        self._nodes.append(Text(content, self._origin, Span(self._buf_start, end)))

    def _push_call(self) -> None:
        span = Span(self._call_start, self._current_pos())
        try:
            function, arguments = parse_call("".join(self._buf))
        except CallParseError as exc:
            exc.locate(self._origin, span, self._source)
            raise
        self._nodes.append(Call(function, arguments, self._origin, span))


def segment(text: str, origin: str | Path = "input.md") -> Document:
    """Convenience function: segment text and return the document."""
    return Segmenter(text, origin).segment()

"""Renderer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdpp.ast import Call, Document, Text
from mdpp.render import render
from mdpp.tokens import Position, Span

S = Span(Position(1, 1, 0), Position(1, 1, 0))
ORIGIN = Path("doc.md")


class TestRender:
    def test_concatenates_in_order(self) -> None:
        doc = Document((Text("a", ORIGIN, S), Text("", ORIGIN, S), Text("bc\n", ORIGIN, S)))
        assert render(doc) == "abc\n"

    def test_empty_document(self) -> None:
        assert render(Document(())) == ""

    def test_unexpanded_call_is_contract_violation(self) -> None:
        doc = Document((Text("a", ORIGIN, S), Call("include", (), ORIGIN, S)))
        with pytest.raises(AssertionError, match="include"):
            render(doc)

    def test_segmented_plain_text_round_trips(self, seg) -> None:
        source = "line { one }\n\tline two }}\n"
        assert render(seg(source)) == source

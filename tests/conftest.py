"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdpp.ast import Call, Document, FunctionDescriptor, ParameterType, Text, Value
from mdpp.lexer import segment
from mdpp.providers import EvalContext, Provider


@pytest.fixture
def seg():
    """Return a helper that segments source and returns a Document."""

    def _seg(source: str, origin: str | Path = "test.md") -> Document:
        return segment(source, origin)

    return _seg


@pytest.fixture
def write_files(tmp_path: Path):
    """Return a helper that writes {relative name: content} under tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for name, content in files.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


class StaticProvider(Provider):
    """Test provider: each function expands to a fixed piece of source text.

    The text is segmented, so it may itself contain calls. Every invocation
    is recorded in ``calls``.
    """

    def __init__(
        self,
        outputs: dict[str, str],
        signatures: tuple[tuple[ParameterType, ...], ...] = ((),),
    ) -> None:
        self._outputs = outputs
        self._functions = frozenset(FunctionDescriptor(name, signatures) for name in outputs)
        self.calls: list[tuple[str, tuple[Value, ...], EvalContext]] = []

    def exposed_functions(self) -> frozenset[FunctionDescriptor]:
        return self._functions

    def invoke(self, function: str, arguments: tuple[Value, ...], ctx: EvalContext) -> Document:
        self.calls.append((function, arguments, ctx))
        return segment(self._outputs[function], ctx.base_directory / f"{function}.md")


def contents(doc: Document) -> list[str]:
    """Return the content of every Text node, failing on Call nodes."""
    result = []
    for node in doc.children:
        assert isinstance(node, Text), f"Expected Text, got {type(node).__name__}"
        result.append(node.content)
    return result


def assert_call(node: Call | Text, function: str, arguments: tuple[Value, ...] = ()) -> None:
    """Assert basic properties of a Call node."""
    assert isinstance(node, Call), f"Expected Call, got {type(node).__name__}"
    assert node.function == function, f"Expected function '{function}', got '{node.function}'"
    assert node.arguments == arguments, f"Expected {arguments}, got {node.arguments}"

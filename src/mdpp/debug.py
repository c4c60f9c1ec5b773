"""--debug document dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from mdpp.ast import Call, Document, NumberValue, PathValue, StringValue, Text, Value


def dump_document(doc: Document, *, title: str = "Document", file: TextIO | None = None) -> None:
    """Print a human-readable node list to *file* (stderr by default)."""
    if file is None:
        file = sys.stderr
    file.write(f"{title}\n")
    for child in doc.children:
        if isinstance(child, Text):
            _dump_text(child, file)
        elif isinstance(child, Call):
            _dump_call(child, file)


def _location(node: Text | Call) -> str:
    return f"{node.origin}:{node.span.start.line}:{node.span.start.column}"


def _dump_text(node: Text, f: TextIO) -> None:
    f.write(f"  Text({node.content!r}) @ {_location(node)}\n")


def _dump_call(node: Call, f: TextIO) -> None:
    args = ", ".join(_format_value(a) for a in node.arguments)
    f.write(f"  Call {node.function}({args}) @ {_location(node)}\n")


def _format_value(value: Value) -> str:
    if isinstance(value, PathValue):
        return f"Path({str(value.value)!r})"
    if isinstance(value, StringValue):
        return f"String({value.value!r})"
    if isinstance(value, NumberValue):
        return f"Number({value.value})"
    return repr(value)

"""Error types with formatted source context."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from mdpp.tokens import Span

if TYPE_CHECKING:
    from mdpp.ast import Call


class CompilationError(Exception):
    """Base of every recoverable failure in a compilation run.

    Carries the document (``origin``) and source range (``span``) that
    triggered it when known, plus the chain of calls whose expansion it
    escaped from, innermost first.
    """

    def __init__(
        self,
        message: str,
        *,
        origin: Path | None = None,
        span: Span | None = None,
        source: str = "",
    ) -> None:
        self.message = message
        self.origin = origin
        self.span = span
        self.source = source
        self.expansion: list[Call] = []
        super().__init__(message)

    def __str__(self) -> str:
        return self.format()

    def locate(self, origin: Path, span: Span | None = None, source: str = "") -> None:
        """Attach a location unless one is already known."""
        if self.origin is not None:
            return
        self.origin = origin
        self.span = span
        self.source = source

    def add_frame(self, call: Call) -> None:
        """Record that the error escaped while expanding *call*."""
        self.expansion.append(call)

    def format(self) -> str:
        result = f"error: {self.message}"
        if self.origin is not None:
            result += "\n" + _format_location(self.origin, self.span, self.source)
        if self.expansion:
            chain = " -> ".join(
                f"{c.origin}:{c.span.start.line}:{c.span.start.column} {c.function}"
                for c in reversed(self.expansion)
            )
            result += f"\n  in expansion chain: {chain}"
        return result


def _format_location(origin: Path, span: Span | None, source: str) -> str:
    if span is None:
        return f"  --> {origin}"

    line_num = str(span.start.line)
    col = span.start.column
    gutter_width = len(line_num) + 1
    header = f"{' ' * gutter_width}--> {origin}:{span.start.line}:{col}"

    lines = source.splitlines()
    line_idx = span.start.line - 1
    if not 0 <= line_idx < len(lines):
        return header
    source_line = lines[line_idx]

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"
    return (
        f"{header}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {' ' * (col - 1)}{'^' * underline_len}"
    )


# ---------------------------------------------------------------------------
# Call-parse errors
# ---------------------------------------------------------------------------


class CallParseError(CompilationError):
    """Syntax error in one call's name or argument list."""


class InvalidSymbol(CallParseError):
    """A character in the function name that is not alphanumeric."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"invalid symbol {symbol!r} in function name")


class EmptyArgument(CallParseError):
    """An argument slot holding only whitespace."""

    def __init__(self) -> None:
        super().__init__("empty argument")


class UnclosedLiteral(CallParseError):
    """A path or string literal missing its closing delimiter."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"unclosed literal: {text}")


class IntegerParseError(CallParseError):
    """A bare argument that is not a signed 64-bit integer."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"invalid integer literal: {text!r}")


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------


class ProviderError(CompilationError):
    """Failure while dispatching or executing a call."""


class FunctionNotFound(ProviderError):
    """No registered provider exposes the called name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"function `{name}` is not found")


class InvalidArguments(ProviderError):
    """Arguments rejected by the provider or its signatures."""

    def __init__(self, message: str = "invalid arguments") -> None:
        super().__init__(message)


class ExternalError(ProviderError):
    """I/O or decoding failure inside a provider."""

    def __init__(self, message: str) -> None:
        super().__init__(f"external error: {message}")


class NestedCompilationError(ProviderError):
    """A compilation error raised while processing another document."""

    def __init__(self, cause: CompilationError) -> None:
        self.cause = cause
        super().__init__(f"nested compilation error: {cause.message}")

    def format(self) -> str:
        nested = "\n".join("  " + line for line in self.cause.format().splitlines())
        return f"{super().format()}\ncaused by:\n{nested}"


class DepthLimitExceeded(ProviderError):
    """Expansion nested deeper than the configured limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"expansion depth limit ({limit}) exceeded")


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------


class SourceReadError(CompilationError):
    """The input document could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read {path}: {reason}")

"""Minimal LSP server for mdpp — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from mdpp import __version__
from mdpp.errors import CallParseError, CompilationError
from mdpp.eval import evaluate
from mdpp.lexer import segment
from mdpp.tokens import Span

# Keeps a self-including document from exhausting the stack
_MAX_DEPTH = 64

server = LanguageServer("mdpp-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(span: Span | None) -> Range:
    """Convert a 1-based span to a 0-based LSP range."""
    if span is None:
        return Range(start=Position(line=0, character=0), end=Position(line=0, character=0))
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _diagnostic(exc: CompilationError, severity: DiagnosticSeverity) -> Diagnostic:
    # Point at the call in the open document, even for errors in included files
    span = exc.expansion[-1].span if exc.expansion else exc.span
    message = exc.message
    if exc.expansion:
        chain = " -> ".join(c.function for c in reversed(exc.expansion))
        message += f" (in expansion: {chain})"
    return Diagnostic(
        range=_range(span),
        message=message,
        severity=severity,
        source="mdpp",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the mdpp pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        segmented = segment(doc.source, doc.path)
    except CallParseError as exc:
        diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Error))
    else:
        try:
            evaluate(segmented, max_depth=_MAX_DEPTH)
        except CompilationError as exc:
            diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Warning))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()

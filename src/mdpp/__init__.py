"""mdpp — {{function(args)}} macro preprocessor for text documents."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdpp.providers import Provider, ProviderRegistry

__version__ = "0.1.0"


def compile(
    source: str,
    filename: str = "input.md",
    providers: ProviderRegistry | Iterable[Provider] | None = None,
) -> str:
    """Segment, evaluate, and render source text."""
    from mdpp.eval import evaluate
    from mdpp.lexer import segment
    from mdpp.render import render

    doc = segment(source, filename)
    doc = evaluate(doc, providers)
    return render(doc)

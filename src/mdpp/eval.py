"""Recursive evaluator — dispatches calls to providers and splices their output."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from mdpp.ast import Call, Document, Node, Text
from mdpp.errors import CompilationError, DepthLimitExceeded, FunctionNotFound, InvalidArguments
from mdpp.providers import EvalContext, Provider, ProviderRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Options:
    registry: ProviderRegistry
    max_depth: int | None
    strict_signatures: bool


def evaluate(
    doc: Document,
    providers: ProviderRegistry | Iterable[Provider] | None = None,
    *,
    max_depth: int | None = None,
    strict_signatures: bool = False,
) -> Document:
    """Expand every call in *doc* and return a document of Text nodes only.

    Each call goes to the first provider exposing its name, and whatever the
    provider returns is evaluated again before being spliced in. Expansion is
    unbounded unless *max_depth* is given, so a document that includes itself
    recurses until the interpreter raises RecursionError.
    """
    if providers is None:
        from mdpp.builtins import default_registry

        registry = default_registry()
    elif isinstance(providers, ProviderRegistry):
        registry = providers
    else:
        registry = ProviderRegistry(providers)

    opts = _Options(registry, max_depth, strict_signatures)
    return Document(tuple(_evaluate_nodes(doc.children, opts, 0)))


def _evaluate_nodes(
    children: tuple[Node, ...],
    opts: _Options,
    depth: int,
) -> list[Text]:
    result: list[Text] = []
    for child in children:
        if isinstance(child, Call):
            result.extend(_expand_call(child, opts, depth))
        else:
            result.append(child)
    return result


def _expand_call(call: Call, opts: _Options, depth: int) -> list[Text]:
    try:
        return _dispatch(call, opts, depth)
    except CompilationError as exc:
        if exc.origin is None:
            exc.locate(call.origin, call.span)
        else:
            exc.add_frame(call)
        raise


def _dispatch(call: Call, opts: _Options, depth: int) -> list[Text]:
    if opts.max_depth is not None and depth >= opts.max_depth:
        raise DepthLimitExceeded(opts.max_depth)

    provider = opts.registry.find(call.function)
    if provider is None:
        raise FunctionNotFound(call.function)

    if opts.strict_signatures:
        descriptor = provider.describe(call.function)
        if descriptor is not None and not descriptor.accepts(call.arguments):
            raise InvalidArguments(f"no signature of `{call.function}` accepts these arguments")

    logger.debug(
        "Expanding %s at %s:%d:%d",
        call.function,
        call.origin,
        call.span.start.line,
        call.span.start.column,
    )
    ctx = EvalContext(call.origin.parent)
    produced = provider.invoke(call.function, call.arguments, ctx)
    return _evaluate_nodes(produced.children, opts, depth + 1)

"""Built-in providers and the default registry."""

from __future__ import annotations

import logging

from mdpp.ast import Document, FunctionDescriptor, ParameterType, PathValue, Value
from mdpp.errors import (
    CallParseError,
    ExternalError,
    FunctionNotFound,
    InvalidArguments,
    NestedCompilationError,
)
from mdpp.providers import EvalContext, Provider, ProviderRegistry

logger = logging.getLogger(__name__)


class IncludeProvider(Provider):
    """``include(#path#)`` — splice another document in place of the call."""

    _FUNCTIONS = frozenset(
        {
            FunctionDescriptor("include", ((ParameterType.PATH,),)),
        }
    )

    def exposed_functions(self) -> frozenset[FunctionDescriptor]:
        return self._FUNCTIONS

    def invoke(
        self,
        function: str,
        arguments: tuple[Value, ...],
        ctx: EvalContext,
    ) -> Document:
        if function != "include":
            raise FunctionNotFound(function)
        if len(arguments) != 1 or not isinstance(arguments[0], PathValue):
            raise InvalidArguments("include expects a single path argument")

        path = ctx.base_directory / arguments[0].value
        logger.debug("Including %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExternalError(f"cannot read {path}: {exc}") from exc

        from mdpp.lexer import segment

        try:
            return segment(content, path)
        except CallParseError as exc:
            raise NestedCompilationError(exc) from exc


def default_registry() -> ProviderRegistry:
    """Return the registry of built-in providers."""
    return ProviderRegistry([IncludeProvider()])

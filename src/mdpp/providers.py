"""Provider contract and the ordered provider registry.

A provider exposes a static set of named functions and executes calls to
them. Providers are looked up in registration order and the first one that
exposes the requested name handles the call; overlapping names are not
reported.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from mdpp.ast import Document, FunctionDescriptor, Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EvalContext:
    """Per-call data handed to a provider."""

    base_directory: Path


class Provider(ABC):
    """A component that makes functions callable from {{...}} syntax."""

    @abstractmethod
    def exposed_functions(self) -> frozenset[FunctionDescriptor]:
        """Return the functions this provider handles."""

    @abstractmethod
    def invoke(
        self,
        function: str,
        arguments: tuple[Value, ...],
        ctx: EvalContext,
    ) -> Document:
        """Execute *function* and return a document to splice in its place.

        The returned document may contain further calls; they are evaluated
        relative to the origin assigned to each returned node. Failures are
        raised as ProviderError subclasses.
        """

    def describe(self, function: str) -> FunctionDescriptor | None:
        """Return the descriptor for *function*, or None."""
        for descriptor in self.exposed_functions():
            if descriptor.name == function:
                return descriptor
        return None


class ProviderRegistry:
    """Immutable ordered sequence of providers."""

    def __init__(self, providers: Iterable[Provider] = ()) -> None:
        self._providers: tuple[Provider, ...] = tuple(providers)

    def __iter__(self) -> Iterator[Provider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def find(self, function: str) -> Provider | None:
        """Return the first provider exposing *function*, or None."""
        for provider in self._providers:
            if provider.describe(function) is not None:
                logger.debug("Dispatching %s to %s", function, type(provider).__name__)
                return provider
        return None

    def function_names(self) -> list[str]:
        names = {d.name for p in self._providers for d in p.exposed_functions()}
        return sorted(names)

"""Document model: argument values, function descriptors, and nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from mdpp.tokens import Span

# ---------------------------------------------------------------------------
# Argument values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StringValue:
    """String literal argument: "text"."""

    value: str


@dataclass(frozen=True, slots=True)
class PathValue:
    """Path literal argument: #some/file.md#."""

    value: Path


@dataclass(frozen=True, slots=True)
class NumberValue:
    """Signed integer literal argument."""

    value: int


Value = StringValue | PathValue | NumberValue


class ParameterType(Enum):
    STRING = auto()
    PATH = auto()
    NUMBER = auto()


_VALUE_TYPES: dict[type, ParameterType] = {
    StringValue: ParameterType.STRING,
    PathValue: ParameterType.PATH,
    NumberValue: ParameterType.NUMBER,
}


def value_type(value: Value) -> ParameterType:
    """Return the parameter type a value satisfies."""
    return _VALUE_TYPES[type(value)]


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    """A function exposed by a provider, with its accepted signatures."""

    name: str
    signatures: tuple[tuple[ParameterType, ...], ...] = ()

    def accepts(self, arguments: tuple[Value, ...]) -> bool:
        """Return True if the argument types match one of the signatures."""
        types = tuple(value_type(a) for a in arguments)
        return types in self.signatures


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text, copied to the output as is."""

    content: str
    origin: Path
    span: Span


@dataclass(frozen=True, slots=True)
class Call:
    """A macro invocation: {{name(args)}}."""

    function: str
    arguments: tuple[Value, ...]
    origin: Path
    span: Span


Node = Text | Call


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered sequence of nodes."""

    children: tuple[Node, ...]

    def is_reduced(self) -> bool:
        """Return True if no call is left to evaluate."""
        return all(isinstance(c, Text) for c in self.children)

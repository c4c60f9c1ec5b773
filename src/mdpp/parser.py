"""Call-argument parser — turns the body of a {{...}} call into a name and values."""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path

from mdpp.ast import NumberValue, PathValue, StringValue, Value
from mdpp.errors import EmptyArgument, IntegerParseError, InvalidSymbol, UnclosedLiteral
from mdpp.tokens import is_name_char

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Integer literals are 64-bit signed
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class _State(Enum):
    START = auto()
    FUNCTION_NAME = auto()
    ARGUMENTS = auto()


def parse_call(body: str) -> tuple[str, tuple[Value, ...]]:
    """Parse a call body such as ``include(#a.md#)`` into (name, arguments).

    Whitespace inside the name is ignored. Inside the argument list a ``"``
    toggles string mode unless a path literal is open, and a ``#`` toggles
    path mode unless a string literal is open; while either is open,
    ``,`` and ``)`` are plain content. Characters after the closing ``)``
    are ignored. A body that never reaches ``)`` yields the arguments closed
    so far, and an empty name if ``(`` was never seen.
    """
    state = _State.START
    name_chars: list[str] = []
    function_name = ""
    args: list[Value] = []
    buf: list[str] = []
    in_string = False
    in_path = False

    for ch in body:
        if state == _State.START:
            if ch.isspace():
                continue
            state = _State.FUNCTION_NAME

        if state == _State.FUNCTION_NAME:
            if is_name_char(ch):
                name_chars.append(ch)
            elif ch == "(":
                function_name = "".join(name_chars)
                state = _State.ARGUMENTS
            elif not ch.isspace():
                raise InvalidSymbol(ch)
            continue

        if ch == '"' and not in_path:
            in_string = not in_string
        if ch == "#" and not in_string:
            in_path = not in_path

        if in_string or in_path:
            buf.append(ch)
        elif ch == ")":
            text = "".join(buf)
            # Only a bare f() takes no arguments
            if args or text:
                args.append(parse_argument(text))
            break
        elif ch == ",":
            args.append(parse_argument("".join(buf)))
            buf.clear()
        else:
            buf.append(ch)

    return function_name, tuple(args)


def parse_argument(buffer: str) -> Value:
    """Classify one trimmed argument by its first character."""
    text = buffer.strip()
    if not text:
        raise EmptyArgument()

    quote = text[0]
    if quote in '#"':
        if len(text) < 2 or not text.endswith(quote):
            raise UnclosedLiteral(text)
        inner = text[1:-1]
        if quote == "#":
            return PathValue(Path(inner))
        return StringValue(inner)

    if not _INTEGER.fullmatch(text):
        raise IntegerParseError(text)
    number = int(text)
    if not _INT_MIN <= number <= _INT_MAX:
        raise IntegerParseError(text)
    return NumberValue(number)

"""Call-argument parser tests: names, literal forms, and syntax errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdpp.ast import NumberValue, PathValue, StringValue
from mdpp.errors import (
    CallParseError,
    EmptyArgument,
    IntegerParseError,
    InvalidSymbol,
    UnclosedLiteral,
)
from mdpp.parser import parse_argument, parse_call


class TestFunctionName:
    def test_simple(self):
        assert parse_call("include(#a.md#)") == ("include", (PathValue(Path("a.md")),))

    def test_leading_whitespace(self):
        assert parse_call("  \n\tf(1)") == ("f", (NumberValue(1),))

    def test_whitespace_inside_name_ignored(self):
        assert parse_call("in clude (1)")[0] == "include"

    def test_alphanumeric(self):
        assert parse_call("h2o(1)")[0] == "h2o"

    @pytest.mark.parametrize("symbol", ["-", "_", ".", "#", '"'])
    def test_invalid_symbol(self, symbol: str):
        with pytest.raises(InvalidSymbol) as exc_info:
            parse_call(f"f{symbol}g(1)")
        assert exc_info.value.symbol == symbol

    def test_missing_paren_gives_empty_name(self):
        assert parse_call("include") == ("", ())


class TestArguments:
    def test_mixed_literals(self):
        name, args = parse_call('f(#a#, "b", 3)')
        assert name == "f"
        assert args == (PathValue(Path("a")), StringValue("b"), NumberValue(3))

    def test_no_arguments(self):
        assert parse_call("f()") == ("f", ())

    def test_whitespace_only_argument_list(self):
        with pytest.raises(EmptyArgument):
            parse_call("f(   )")

    def test_comma_inside_string(self):
        _, args = parse_call('f("a, b", 1)')
        assert args == (StringValue("a, b"), NumberValue(1))

    def test_comma_and_paren_inside_path(self):
        _, args = parse_call("f(#dir (1),x.md#)")
        assert args == (PathValue(Path("dir (1),x.md")),)

    def test_hash_inside_string(self):
        _, args = parse_call('f("issue #12")')
        assert args == (StringValue("issue #12"),)

    def test_quote_inside_path(self):
        _, args = parse_call('f(#say "hi".md#)')
        assert args == (PathValue(Path('say "hi".md')),)

    def test_surrounding_whitespace_trimmed(self):
        _, args = parse_call('f(   "  padded  "   ,   #p#  )')
        assert args == (StringValue("  padded  "), PathValue(Path("p")))

    def test_signed_integers(self):
        _, args = parse_call("f(-42, +7, 0)")
        assert args == (NumberValue(-42), NumberValue(7), NumberValue(0))

    def test_trailing_characters_ignored(self):
        assert parse_call("f(1) and more") == ("f", (NumberValue(1),))

    def test_unclosed_argument_list_keeps_closed_arguments(self):
        assert parse_call("f(1, 2") == ("f", (NumberValue(1),))

    def test_unclosed_argument_list_without_arguments(self):
        assert parse_call("f(1") == ("f", ())


class TestArgumentErrors:
    @pytest.mark.parametrize("body", ["f(1, )", "f(,1)", "f(1,,2)", "f( , )"])
    def test_empty_argument(self, body: str):
        with pytest.raises(EmptyArgument):
            parse_call(body)

    def test_non_numeric_bare_word(self):
        with pytest.raises(IntegerParseError) as exc_info:
            parse_call("f(xyz)")
        assert exc_info.value.text == "xyz"

    def test_text_after_closed_literal(self):
        with pytest.raises(UnclosedLiteral):
            parse_call("f(#a# b)")

    def test_errors_share_base_class(self):
        with pytest.raises(CallParseError):
            parse_call("f(nope)")


class TestParseArgument:
    def test_whitespace_only(self):
        with pytest.raises(EmptyArgument):
            parse_argument("   \t ")

    @pytest.mark.parametrize("text", ["#abc", '"abc', "#", '"', "  #abc  "])
    def test_unclosed_literal(self, text: str):
        with pytest.raises(UnclosedLiteral):
            parse_argument(text)

    @pytest.mark.parametrize("text", ["xyz", "1.5", "1_000", "0x10", "--1", "12abc"])
    def test_not_an_integer(self, text: str):
        with pytest.raises(IntegerParseError):
            parse_argument(text)

    def test_integer_range(self):
        assert parse_argument("9223372036854775807") == NumberValue(2**63 - 1)
        assert parse_argument("-9223372036854775808") == NumberValue(-(2**63))
        with pytest.raises(IntegerParseError):
            parse_argument("9223372036854775808")

    def test_empty_string_literal(self):
        assert parse_argument('""') == StringValue("")

    def test_path_literal(self):
        assert parse_argument("#../shared/footer.md#") == PathValue(Path("../shared/footer.md"))

"""Tests for the token-level parser."""

from __future__ import annotations

import pytest

from envscan.errors import ParseError
from envscan.lexer import QuoteType
from envscan.parser import Parser


def parse(text: str) -> Parser:
    p = Parser()
    p.parse(text)
    return p


def test_parse_simple():
    assert parse("FOO=bar").values() == {"FOO": "bar"}


def test_parse_empty_input():
    assert parse("").values() == {}
    assert parse("\n\n  # only comments\n").values() == {}


@pytest.mark.parametrize("line", ["KEY = value", "KEY =value", "KEY= value", "KEY=value  ", "  KEY=value"])
def test_whitespace_tolerance(line):
    assert parse(line).values() == {"KEY": "value"}


def test_export_is_transparent():
    assert parse("export FOO=bar").values() == parse("FOO=bar").values()


def test_empty_values():
    p = parse("A=\nB =\nC=")
    assert p.values() == {"A": "", "B": "", "C": ""}
    assert set(p.quote_types().values()) == {QuoteType.NONE}


def test_quote_types_recorded():
    p = parse("A=1\nB='2'\nC=\"3\"\nD='''4'''\nE=\"\"\"5\"\"\"")
    assert p.quote_types() == {
        "A": QuoteType.NONE,
        "B": QuoteType.SINGLE,
        "C": QuoteType.DOUBLE,
        "D": QuoteType.SINGLE,
        "E": QuoteType.DOUBLE,
    }


def test_duplicate_key_last_wins():
    p = parse("A='first'\nA=second")
    assert p.values() == {"A": "second"}
    assert p.quote_types()["A"] is QuoteType.NONE


def test_parse_accumulates_across_calls():
    p = Parser()
    p.parse("A=1\nB=2")
    p.parse("B=3\nC=4")
    assert p.values() == {"A": "1", "B": "3", "C": "4"}


def test_values_is_a_copy():
    p = parse("A=1")
    vals = p.values()
    vals["A"] = "changed"
    vals["NEW"] = "x"
    assert p.values() == {"A": "1"}
    p.quote_types()["A"] = QuoteType.SINGLE
    assert p.quote_types()["A"] is QuoteType.NONE


def test_key_without_equals():
    with pytest.raises(ParseError) as exc:
        parse("KEY\nOTHER=1")
    assert exc.value.message == "expected '=', got NEWLINE ('\\n')"
    assert (exc.value.line, exc.value.column) == (1, 3)
    assert exc.value.content == "KEY\nOTHER=1"


def test_key_at_end_of_input():
    with pytest.raises(ParseError, match="expected '=', got EOF"):
        parse("export KEY")


def test_comment_where_value_expected():
    with pytest.raises(ParseError, match="expected VALUE, got COMMENT"):
        parse("A= # nothing here")


def test_invalid_line():
    with pytest.raises(ParseError, match="invalid start of token"):
        parse("INVALID LINE\nfoo=bar")


def test_lexical_error_records_nothing():
    p = Parser()
    with pytest.raises(ParseError):
        p.parse("A=1\nB='oops")
    assert p.values() == {}


def test_error_does_not_drop_earlier_inputs():
    p = Parser()
    p.parse("A=1")
    with pytest.raises(ParseError):
        p.parse("B C")
    assert p.values() == {"A": "1"}


def test_expand_variables_method():
    p = parse("A=1\nB=${A}\nC='${A}'")
    p.expand_variables(include_vars={})
    assert p.values() == {"A": "1", "B": "1", "C": "${A}"}

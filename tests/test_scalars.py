import pytest

from hoconkit.errors import ParseError
from hoconkit.scalars import (
    horizontal_space0,
    is_hocon_horizontal_whitespace,
    is_hocon_whitespace,
    multi_space0,
    parse_boolean,
    parse_null,
)


@pytest.mark.parametrize(
    "text, expected, rest",
    [
        ("true", True, ""),
        ("false", False, ""),
        ("true \t", True, ""),
        ("true ,", True, ","),
        ("true }", True, "}"),
    ],
)
def test_valid_boolean(text, expected, rest):
    assert parse_boolean(text) == (expected, rest)


@pytest.mark.parametrize(
    "text", ["True", "TRUE", "FALSE", "true1", "true 1", "False", "falseX"]
)
def test_invalid_boolean(text):
    with pytest.raises(ParseError):
        parse_boolean(text)


def test_boolean_error_carries_context():
    with pytest.raises(ParseError) as info:
        parse_boolean("nope")
    assert "boolean literal (expected 'true' or 'false')" in info.value.contexts


def test_boolean_line_endings():
    assert parse_boolean("true\r\nx") == (True, "\r\nx")
    with pytest.raises(ParseError):
        parse_boolean("true\rx")


@pytest.mark.parametrize("text, rest", [("null", ""), ("null ", " ")])
def test_valid_null(text, rest):
    assert parse_null(text) == (None, rest)


@pytest.mark.parametrize("text", ["invalid", "nul", ""])
def test_invalid_null(text):
    with pytest.raises(ParseError):
        parse_null(text)


def test_whitespace_predicates():
    assert is_hocon_whitespace("\x1c")
    assert is_hocon_whitespace("\n")
    assert not is_hocon_whitespace("a")
    assert is_hocon_horizontal_whitespace("\t")
    assert not is_hocon_horizontal_whitespace("\n")
    assert not is_hocon_horizontal_whitespace("\r")


def test_multi_space0_consumes_newlines():
    assert multi_space0(" \n\t x") == (" \n\t ", "x")
    assert multi_space0("x") == ("", "x")


def test_horizontal_space0_stops_at_newline():
    assert horizontal_space0(" \t\nx") == (" \t", "\nx")
    assert horizontal_space0("") == ("", "")
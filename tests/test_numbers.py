import sys

import pytest

from hoconkit.errors import ParseError
from hoconkit.numbers import parse_number


@pytest.mark.parametrize(
    "text, expected, rest",
    [
        ("1.0", 1.0, ""),
        ("-999", -999, ""),
        ("233", 233, ""),
        ("-233.233", -233.233, ""),
        ("1.7976931348623157e+308", sys.float_info.max, ""),
        ("-1.7976931348623157e+308", -sys.float_info.max, ""),
        ("-1E-1", -0.1, ""),
        ("-1E-1,", -0.1, ","),
        ("-1E-1,\r\n", -0.1, ",\r\n"),
        ("-1E-1 \n", -0.1, "\n"),
        ("1.0 \n", 1.0, "\n"),
        ("1.0 }\n", 1.0, "}\n"),
    ],
)
def test_valid_number(text, expected, rest):
    value, remaining = parse_number(text)
    assert value == expected
    assert remaining == rest


@pytest.mark.parametrize("text", ["-1e1q", "foo12", "12 hello"])
def test_invalid_number(text):
    with pytest.raises(ParseError):
        parse_number(text)


def test_integer_and_float_kinds():
    integer, _ = parse_number("233")
    fraction, _ = parse_number("1.0")
    assert isinstance(integer, int) and integer == 233
    assert isinstance(fraction, float) and fraction == 1.0


@pytest.mark.parametrize("text", [".5", "01", "1e400"])
def test_rejected_by_number_grammar(text):
    with pytest.raises(ParseError):
        parse_number(text)
"""The numeric literal parser."""

from __future__ import annotations

import math
import re

from hoconkit.errors import ParseError
from hoconkit.scalars import horizontal_space0

_NUMBER = re.compile(r"-?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_JSON_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")

_I64_MIN = -(2**63)
_U64_MAX = 2**64 - 1


def _at_value_end(text: str) -> bool:
    return text == "" or text.startswith((",", "}", "\n", "\r\n"))


def _convert(literal: str) -> int | float:
    if not _JSON_NUMBER.fullmatch(literal):
        raise ParseError(f"invalid number: {literal}", literal, ["number"])
    if any(c in literal for c in ".eE"):
        number: int | float = float(literal)
    else:
        number = int(literal)
        if not _I64_MIN <= number <= _U64_MAX:
            number = float(number)
    if isinstance(number, float) and math.isinf(number):
        raise ParseError(f"number out of range: {literal}", literal, ["number"])
    return number


def parse_number(text: str) -> tuple[int | float, str]:
    """Parse a numeric literal followed by a value terminator.

    Integers become ``int`` and anything with a fraction or exponent
    becomes ``float``. Trailing horizontal whitespace is consumed; the
    terminator (``,``, ``}``, a line ending or end of input) is not.
    """
    match = _NUMBER.match(text)
    if match is None:
        raise ParseError("expected a number", text, ["number"])
    _, rest = horizontal_space0(text[match.end():])
    if not _at_value_end(rest):
        raise ParseError(
            "expected ',', '}', a line ending or end of input after number",
            rest,
            ["number"],
        )
    return _convert(match.group()), rest
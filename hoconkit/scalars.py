"""Whitespace handling and the boolean and null literal parsers.

Parsers return ``(value, rest)`` and raise :class:`ParseError` on failure.
"""

from __future__ import annotations

from hoconkit.errors import ParseError

_WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
    "\x1c\x1d\x1e\x1f"
)

_BOOLEAN_CONTEXT = "boolean literal (expected 'true' or 'false')"


def is_hocon_whitespace(char: str) -> bool:
    """True for Unicode white space and the separators U+001C..U+001F."""
    return char in _WHITESPACE


def is_hocon_horizontal_whitespace(char: str) -> bool:
    """HOCON whitespace other than carriage return and line feed."""
    return is_hocon_whitespace(char) and char not in "\r\n"


def _take_while(text: str, predicate) -> tuple[str, str]:
    end = 0
    for char in text:
        if not predicate(char):
            break
        end += 1
    return text[:end], text[end:]


def multi_space0(text: str) -> tuple[str, str]:
    """Consume any leading HOCON whitespace, newlines included."""
    return _take_while(text, is_hocon_whitespace)


def horizontal_space0(text: str) -> tuple[str, str]:
    """Consume any leading horizontal HOCON whitespace."""
    return _take_while(text, is_hocon_horizontal_whitespace)


def _at_value_end(text: str) -> bool:
    return text == "" or text.startswith((",", "}", "\n", "\r\n"))


def parse_boolean(text: str) -> tuple[bool, str]:
    """Parse ``true`` or ``false`` followed by a value terminator.

    Trailing horizontal whitespace is consumed; the terminator
    (``,``, ``}``, a line ending or the end of input) is not.
    """
    for literal, result in (("true", True), ("false", False)):
        if text.startswith(literal):
            _, rest = horizontal_space0(text[len(literal):])
            if _at_value_end(rest):
                return result, rest
            raise ParseError(
                "expected ',', '}', a line ending or end of input after boolean",
                rest,
                [_BOOLEAN_CONTEXT],
            )
    raise ParseError("expected 'true' or 'false'", text, [_BOOLEAN_CONTEXT])


def parse_null(text: str) -> tuple[None, str]:
    """Parse the literal ``null``."""
    if text.startswith("null"):
        return None, text[4:]
    raise ParseError("expected 'null'", text, ["null"])
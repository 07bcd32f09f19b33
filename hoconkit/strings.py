"""Parsers for quoted, unquoted and multiline strings, keys and path expressions.

Each parser returns ``(value, rest)`` and raises :class:`ParseError` on failure.
"""

from __future__ import annotations

from typing import NoReturn

from hoconkit.errors import ParseError
from hoconkit.rawstring import (
    ConcatString,
    MultilineString,
    QuotedString,
    RawString,
    UnquotedString,
)
from hoconkit.scalars import is_hocon_horizontal_whitespace, is_hocon_whitespace

FORBIDDEN_CHARACTERS = (
    "$", '"', "{", "}", "[", "]", ":", "=", ",", "+",
    "#", "`", "^", "?", "!", "@", "*", "&", "\\",
)
_FORBIDDEN = frozenset(FORBIDDEN_CHARACTERS)

_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
    "/": "/",
}
_HEX = frozenset("0123456789abcdefABCDEF")
_TRIPLE = '"""'


def _fail(message: str, text: str, pos: int, context: str) -> NoReturn:
    raise ParseError(message, text[pos:], [context])


def _escaped_char(text: str, pos: int) -> tuple[str, int]:
    """Decode the escape sequence whose backslash sits at ``pos``."""
    pos += 1
    if pos >= len(text):
        _fail("unterminated escape sequence", text, pos, "escape")
    char = text[pos]
    if char in _ESCAPES:
        return _ESCAPES[char], pos + 1
    if char in "uU":
        end = pos + 1
        while end < len(text) and end - pos - 1 < 8 and text[end] in _HEX:
            end += 1
        if end - pos - 1 >= 4:
            code_point = int(text[pos + 1:end], 16)
            if not 0xD800 <= code_point <= 0xDFFF and code_point <= 0x10FFFF:
                return chr(code_point), end
    # Any other escaped character stands for itself.
    return char, pos + 1


def _quoted(text: str, pos: int) -> tuple[str, int]:
    if not text.startswith('"', pos):
        _fail("expected '\"'", text, pos, "quoted string")
    pos += 1
    pieces: list[str] = []
    while pos < len(text):
        char = text[pos]
        if char == '"':
            return "".join(pieces), pos + 1
        if char == "\\":
            if pos + 1 >= len(text):
                break
            decoded, pos = _escaped_char(text, pos)
            pieces.append(decoded)
        else:
            end = pos
            while end < len(text) and text[end] not in '"\\':
                end += 1
            pieces.append(text[pos:end])
            pos = end
    _fail("unterminated quoted string", text, pos, "quoted string")


def _multiline(text: str, pos: int) -> tuple[str, int]:
    if not text.startswith(_TRIPLE, pos):
        _fail("expected '\"\"\"'", text, pos, "multiline string")
    start = pos + len(_TRIPLE)
    end = text.find(_TRIPLE, start)
    if end < 0:
        _fail("unterminated multiline string", text, start, "multiline string")
    return text[start:end], end + len(_TRIPLE)


def _accepts(text: str, pos: int, in_path: bool) -> bool:
    """Whether an unquoted (path) character may be taken at ``pos``."""
    if pos >= len(text):
        return False
    char = text[pos]
    if char == "/":
        return not text.startswith("/", pos + 1)
    if char in _FORBIDDEN:
        return False
    if in_path:
        return char not in ".\n"
    return not is_hocon_whitespace(char)


def _unquoted_run(text: str, pos: int, in_path: bool) -> int:
    end = pos
    while _accepts(text, end, in_path):
        end += 1
    return end


def _unquoted(text: str, pos: int) -> tuple[str, int]:
    end = _unquoted_run(text, pos, in_path=False)
    if end == pos:
        _fail("expected an unquoted string", text, pos, "unquoted string")
    return text[pos:end], end


def _unquoted_path(text: str, pos: int) -> tuple[str, int]:
    end = _unquoted_run(text, pos, in_path=True)
    segment = text[pos:end]
    if not any(not is_hocon_horizontal_whitespace(c) for c in segment):
        _fail("expected a path segment", text, pos, "path expression")
    return segment, end


def _horizontal_end(text: str, pos: int) -> int:
    while pos < len(text) and is_hocon_horizontal_whitespace(text[pos]):
        pos += 1
    return pos


def _trim_end(value: str) -> str:
    end = len(value)
    while end > 0 and is_hocon_horizontal_whitespace(value[end - 1]):
        end -= 1
    return value[:end]


def _path_segment(text: str, pos: int) -> tuple[RawString, int]:
    for reader, kind in (
        (_multiline, MultilineString),
        (_quoted, QuotedString),
        (_unquoted_path, UnquotedString),
    ):
        try:
            value, end = reader(text, pos)
        except ParseError:
            continue
        return kind(value), end
    _fail("expected a path segment", text, pos, "path expression")


def _path(text: str, pos: int) -> tuple[list[RawString], int]:
    first, pos = _path_segment(text, pos)
    segments = [first]
    while text.startswith(".", pos):
        try:
            segment, end = _path_segment(text, pos + 1)
        except ParseError:
            break
        segments.append(segment)
        pos = end
    last = segments[-1]
    segments[-1] = type(last)(_trim_end(last.value))
    return segments, pos


def _string_piece(text: str, pos: int) -> tuple[RawString, int]:
    for reader, kind in (
        (_multiline, MultilineString),
        (_quoted, QuotedString),
        (_unquoted, UnquotedString),
    ):
        try:
            value, end = reader(text, pos)
        except ParseError:
            continue
        return kind(value), end
    _fail("expected a string", text, pos, "string")


def parse_quoted_string(text: str) -> tuple[str, str]:
    """Parse a double-quoted string, decoding its escape sequences."""
    value, end = _quoted(text, 0)
    return value, text[end:]


def parse_unquoted_char(text: str) -> tuple[str, str]:
    """Parse one character allowed in an unquoted string."""
    if not _accepts(text, 0, in_path=False):
        _fail("expected an unquoted character", text, 0, "unquoted string")
    return text[0], text[1:]


def parse_unquoted_path_char(text: str) -> tuple[str, str]:
    """Parse one character allowed in an unquoted path segment."""
    if not _accepts(text, 0, in_path=True):
        _fail("expected a path character", text, 0, "path expression")
    return text[0], text[1:]


def parse_unquoted_string(text: str) -> tuple[str, str]:
    """Parse one or more characters allowed in an unquoted string."""
    value, end = _unquoted(text, 0)
    return value, text[end:]


def parse_multiline_string(text: str) -> tuple[str, str]:
    """Parse a string enclosed in triple quotes."""
    value, end = _multiline(text, 0)
    return value, text[end:]


def parse_key(text: str) -> tuple[RawString, str]:
    """Parse a key: a single segment, or dotted segments as a concatenation."""
    segments, end = _path(text, 0)
    if len(segments) == 1:
        return segments[0], text[end:]
    return ConcatString(tuple((segment, ".") for segment in segments)), text[end:]


def parse_path_expression(text: str) -> tuple[RawString, str]:
    """Parse a path expression; the same grammar as a key."""
    return parse_key(text)


def parse_string(text: str) -> tuple[RawString, str]:
    """Parse adjacent string pieces separated by optional horizontal space."""
    pieces: list[tuple[RawString, str | None]] = []
    pos = 0
    while True:
        try:
            piece, end = _string_piece(text, pos)
        except ParseError:
            if not pieces:
                raise
            break
        space_end = _horizontal_end(text, end)
        pieces.append((piece, text[end:space_end] or None))
        pos = space_end
    if len(pieces) == 1:
        return pieces[0][0], text[pos:]
    return ConcatString(tuple(pieces)), text[pos:]
"""The HOCON document grammar: values, arrays, objects, comments and includes.

Each parser returns ``(value, rest)`` and raises :class:`ParseError` when the
input does not match. A :class:`ParseError` lets the caller try another
alternative. Any other error, such as an inclusion cycle, ends the parse.
"""

from __future__ import annotations

import re
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Optional

from hoconkit.errors import ParseError
from hoconkit.numbers import parse_number
from hoconkit.options import ConfigParseOptions
from hoconkit.raw import (
    AddAssign,
    InclusionField,
    KeyValueField,
    NewlineCommentField,
    RawArray,
    RawObject,
    RawValue,
    concat,
)
from hoconkit.rawstring import (
    Comment,
    CommentType,
    Inclusion,
    Location,
    RawString,
    Substitution,
)
from hoconkit.scalars import horizontal_space0, multi_space0, parse_boolean, parse_null
from hoconkit.strings import parse_key, parse_path_expression, parse_quoted_string, parse_string

Resolver = Callable[[Inclusion, ConfigParseOptions], Optional[RawObject]]

_COMMENT_CONTENT = re.compile(r"[^\r\n]*")


@dataclass(frozen=True)
class _ParseState:
    options: ConfigParseOptions
    resolver: Resolver | None


_state: ContextVar[_ParseState | None] = ContextVar("hoconkit_parse_state", default=None)


class _Abort(Exception):
    """Carries an error out of the grammar past every alternative."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error


def parse(
    text: str,
    options: ConfigParseOptions | None = None,
    resolver: Resolver | None = None,
) -> RawObject:
    """Parse a whole document, braced or not, into a raw object.

    ``resolver`` is called as ``resolver(inclusion, options)`` for every
    ``include`` directive; a returned object becomes the inclusion's value.
    Without a resolver, inclusions are left unloaded.
    """
    state = _ParseState(ConfigParseOptions() if options is None else options, resolver)
    token = _state.set(state)
    try:
        _, rest = multi_space0(text)
        try:
            result, rest = parse_object(rest)
        except ParseError:
            result, rest = parse_root_object(rest)
    except _Abort as abort:
        raise abort.error from None
    finally:
        _state.reset(token)
    if rest:
        raise ParseError("unexpected input after the configuration", rest, ["parse"])
    return result


def _single_value(text: str) -> tuple[RawValue, str]:
    for parser in _VALUE_PARSERS:
        try:
            return parser(text)
        except ParseError:
            continue
    raise ParseError("expected a value", text, ["parse_value"])


def parse_value(text: str) -> tuple[RawValue, str]:
    """Parse one value, or several adjacent values as a concatenation."""
    values: list[RawValue] = []
    rest = text
    while True:
        _, start = horizontal_space0(rest)
        try:
            value, after = _single_value(start)
        except ParseError:
            if not values:
                raise
            break
        _, rest = horizontal_space0(after)
        values.append(value)
    if len(values) == 1:
        return values[0], rest
    return concat(values), rest


def next_element_whitespace(text: str) -> tuple[None, str]:
    """Skip whitespace and at most one comma between elements."""
    _, rest = multi_space0(text)
    if rest.startswith(","):
        rest = rest[1:]
    return None, rest


def _array_element(text: str) -> tuple[RawValue, str]:
    _, rest = multi_space0(text)
    value, rest = parse_value(rest)
    _, rest = next_element_whitespace(rest)
    return value, rest


def parse_array(text: str) -> tuple[RawArray, str]:
    """Parse ``[ ... ]``; elements are separated by commas or whitespace."""
    if not text.startswith("["):
        raise ParseError("expected '['", text, ["parse_array"])
    rest = text[1:]
    items: list[RawValue] = []
    while True:
        try:
            item, rest = _array_element(rest)
        except ParseError:
            break
        items.append(item)
    if not rest.startswith("]"):
        raise ParseError("expected ']'", rest, ["parse_array"])
    return RawArray(items), rest[1:]


def _object_fields(text: str) -> tuple[list, str]:
    fields: list = []
    rest = text
    while True:
        try:
            element, rest = _object_element(rest)
        except ParseError:
            break
        fields.extend(element)
    return fields, rest


def parse_object(text: str) -> tuple[RawObject, str]:
    """Parse a braced object ``{ ... }``."""
    if not text.startswith("{"):
        raise ParseError("expected '{'", text, ["parse_object"])
    _, rest = multi_space0(text[1:])
    fields, rest = _object_fields(rest)
    _, rest = multi_space0(rest)
    if not rest.startswith("}"):
        raise ParseError("expected '}'", rest, ["parse_object"])
    return RawObject(fields), rest[1:]


def parse_root_object(text: str) -> tuple[RawObject, str]:
    """Parse the fields of a document whose root has no braces."""
    _, rest = multi_space0(text)
    fields, rest = _object_fields(rest)
    _, rest = multi_space0(rest)
    return RawObject(fields), rest


def _newline_comments(text: str) -> tuple[list[NewlineCommentField], str]:
    comments: list[NewlineCommentField] = []
    rest = text
    while True:
        _, start = multi_space0(rest)
        try:
            comment, after = parse_comment(start)
        except ParseError:
            break
        _, rest = multi_space0(after)
        comments.append(NewlineCommentField(comment))
    return comments, rest


def _object_field(text: str) -> tuple[InclusionField | KeyValueField, str]:
    try:
        inclusion, rest = parse_include(text)
        return InclusionField(inclusion), rest
    except ParseError:
        pass
    try:
        (key, value), rest = parse_key_value(text)
        return KeyValueField(key, value), rest
    except ParseError:
        pass
    try:
        (key, value), rest = parse_add_assign(text)
    except ParseError:
        raise ParseError("expected a field", text, ["object_field"]) from None
    return KeyValueField(key, value), rest


def _object_element(text: str) -> tuple[list, str]:
    before, rest = _newline_comments(text)
    entry, rest = _object_field(rest)
    _, rest = horizontal_space0(rest)
    if rest.startswith(","):
        rest = rest[1:]
    try:
        comment, rest = parse_comment(rest)
    except ParseError:
        pass
    else:
        entry.comment = comment
    after, rest = _newline_comments(rest)
    return [*before, entry, *after], rest


def _key_and_space(text: str, context: str) -> tuple[RawString, str]:
    _, rest = multi_space0(text)
    try:
        key, rest = parse_key(rest)
    except ParseError as error:
        raise ParseError(error.message, error.remaining, [context, *error.contexts]) from None
    _, rest = multi_space0(rest)
    return key, rest


def parse_key_value(text: str) -> tuple[tuple[RawString, RawValue], str]:
    """Parse ``key = value``, ``key : value`` or ``key { ... }``."""
    key, rest = _key_and_space(text, "parse_key_value")
    if rest.startswith((":", "=")):
        rest = rest[1:]
    elif not rest.startswith("{"):
        raise ParseError("expected ':', '=' or '{'", rest, ["parse_key_value"])
    _, rest = multi_space0(rest)
    value, rest = parse_value(rest)
    return (key, value), rest


def parse_add_assign(text: str) -> tuple[tuple[RawString, AddAssign], str]:
    """Parse ``key += value``."""
    key, rest = _key_and_space(text, "parse_add_assign")
    if not rest.startswith("+="):
        raise ParseError("expected '+='", rest, ["parse_add_assign"])
    _, rest = multi_space0(rest[2:])
    value, rest = parse_value(rest)
    return (key, AddAssign(value)), rest


def parse_comment(text: str) -> tuple[Comment, str]:
    """Parse a ``//`` or ``#`` comment up to and including its line ending."""
    _, rest = horizontal_space0(text)
    if rest.startswith("//"):
        kind, rest = CommentType.DOUBLE_SLASH, rest[2:]
    elif rest.startswith("#"):
        kind, rest = CommentType.HASH, rest[1:]
    else:
        raise ParseError("expected '//' or '#'", rest, ["parse_comment"])
    end = _COMMENT_CONTENT.match(rest).end()
    content, rest = rest[:end], rest[end:]
    if rest.startswith("\r\n"):
        rest = rest[2:]
    elif rest.startswith("\n"):
        rest = rest[1:]
    return Comment(content, kind), rest


def parse_substitution(text: str) -> tuple[Substitution, str]:
    """Parse ``${path}`` or ``${?path}``."""
    if not text.startswith("${"):
        raise ParseError("expected '${'", text, ["parse_substitution"])
    rest = text[2:]
    optional = rest.startswith("?")
    if optional:
        rest = rest[1:]
    _, rest = horizontal_space0(rest)
    path, rest = parse_path_expression(rest)
    _, rest = horizontal_space0(rest)
    if not rest.startswith("}"):
        raise ParseError("expected '}'", rest, ["parse_substitution"])
    return Substitution(path, optional), rest[1:]


def _parse_with_location(text: str) -> tuple[Inclusion, str]:
    for location in Location:
        if text.startswith(location.value):
            rest = text[len(location.value):]
            break
    else:
        raise ParseError("expected 'file', 'url' or 'classpath'", text, ["include"])
    if not rest.startswith("("):
        raise ParseError("expected '('", rest, ["include"])
    _, rest = horizontal_space0(rest[1:])
    path, rest = parse_quoted_string(rest)
    _, rest = horizontal_space0(rest)
    if not rest.startswith(")"):
        raise ParseError("expected ')'", rest, ["include"])
    return Inclusion(path, False, location), rest[1:]


def _parse_with_required(text: str) -> tuple[Inclusion, str]:
    if not text.startswith("required("):
        raise ParseError("expected 'required('", text, ["include"])
    _, rest = horizontal_space0(text[len("required("):])
    try:
        inclusion, rest = _parse_with_location(rest)
        inclusion.required = True
    except ParseError:
        path, rest = parse_quoted_string(rest)
        inclusion = Inclusion(path, True)
    _, rest = horizontal_space0(rest)
    if not rest.startswith(")"):
        raise ParseError("expected ')'", rest, ["include"])
    return inclusion, rest[1:]


def _parse_include_directive(text: str) -> tuple[Inclusion, str]:
    _, rest = multi_space0(text)
    if not rest.startswith("include"):
        raise ParseError("expected 'include'", rest, ["include"])
    _, rest = horizontal_space0(rest[len("include"):])
    for parser in (_parse_with_required, _parse_with_location):
        try:
            return parser(rest)
        except ParseError:
            continue
    try:
        path, rest = parse_quoted_string(rest)
    except ParseError:
        raise ParseError("expected an inclusion target", rest, ["include"]) from None
    return Inclusion(path), rest


def parse_include(text: str) -> tuple[Inclusion, str]:
    """Parse an ``include`` directive and load it through the active resolver."""
    inclusion, rest = _parse_include_directive(text)
    state = _state.get()
    if state is not None and state.resolver is not None:
        try:
            loaded = state.resolver(inclusion, state.options)
        except ParseError as error:
            raise _Abort(error) from error
        if loaded is not None:
            inclusion.val = loaded
    return inclusion, rest


_VALUE_PARSERS = (
    parse_boolean,
    parse_null,
    parse_number,
    parse_substitution,
    parse_string,
    parse_array,
    parse_object,
)
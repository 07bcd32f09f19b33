"""Unresolved configuration values as they come out of the parser.

A raw value is one of: :class:`RawObject`, :class:`RawArray`, ``bool``,
``None`` (null), a :class:`~hoconkit.rawstring.RawString`, ``int`` or
``float``, a :class:`~hoconkit.rawstring.Substitution`, :class:`Concat`
or :class:`AddAssign`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Union

from hoconkit.errors import InvalidConversion, InvalidValue
from hoconkit.path import Path
from hoconkit.rawstring import (
    Comment,
    Inclusion,
    QuotedString,
    RawString,
    Substitution,
    raw_string,
)

RAW_OBJECT_TYPE = "object"
RAW_ARRAY_TYPE = "array"
RAW_BOOLEAN_TYPE = "boolean"
RAW_NULL_TYPE = "null"
RAW_QUOTED_STRING_TYPE = "quoted_string"
RAW_UNQUOTED_STRING_TYPE = "unquoted_string"
RAW_MULTILINE_STRING_TYPE = "multiline_string"
RAW_CONCAT_STRING_TYPE = "concat_string"
RAW_NUMBER_TYPE = "number"
RAW_SUBSTITUTION_TYPE = "substitution"
RAW_CONCAT_TYPE = "concat"
RAW_ADD_ASSIGN_TYPE = "add_assign"

_STRING_TYPES = {
    "QuotedString": RAW_QUOTED_STRING_TYPE,
    "UnquotedString": RAW_UNQUOTED_STRING_TYPE,
    "MultilineString": RAW_MULTILINE_STRING_TYPE,
    "ConcatString": RAW_CONCAT_STRING_TYPE,
}

RawValue = Any


def _comment_suffix(comment: Comment | None) -> str:
    return "" if comment is None else f" {comment}"


@dataclass
class InclusionField:
    """An ``include`` directive inside an object."""

    inclusion: Inclusion
    comment: Comment | None = None

    def __str__(self) -> str:
        return f"{self.inclusion}{_comment_suffix(self.comment)}"


@dataclass
class KeyValueField:
    """A ``key: value`` pair inside an object."""

    key: RawString
    value: RawValue
    comment: Comment | None = None

    def __post_init__(self) -> None:
        if isinstance(self.key, str):
            self.key = raw_string(self.key)

    def __str__(self) -> str:
        return f"{self.key}: {render(self.value)}{_comment_suffix(self.comment)}"


@dataclass
class NewlineCommentField:
    """A comment standing on a line of its own."""

    comment: Comment

    def __str__(self) -> str:
        return str(self.comment)


ObjectField = Union[InclusionField, KeyValueField, NewlineCommentField]


@dataclass
class RawObject:
    """The fields of an object, in source order, duplicates kept."""

    fields: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fields = list(self.fields)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[RawString | str, RawValue]]) -> RawObject:
        """Build an object from key/value pairs; plain string keys are quoted."""
        return cls(
            [
                KeyValueField(QuotedString(key) if isinstance(key, str) else key, value)
                for key, value in pairs
            ]
        )

    def __iter__(self) -> Iterator[ObjectField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __str__(self) -> str:
        return "{" + ", ".join(str(f) for f in self.fields) + "}"

    def get_by_path(self, path: Path | str) -> RawValue:
        """The value last assigned at ``path``; ``KeyError`` if there is none."""
        path = Path.parse(path) if isinstance(path, str) else path
        for entry in reversed(self.fields):
            if isinstance(entry, InclusionField):
                if entry.inclusion.val is not None:
                    return entry.inclusion.val.get_by_path(path)
            elif isinstance(entry, KeyValueField):
                key = entry.key.as_path()
                if path.starts_with_segments(key):
                    rest = path.sub_path(len(key))
                    if rest is None:
                        return entry.value
                    if isinstance(entry.value, RawObject):
                        return entry.value.get_by_path(rest)
        raise KeyError(str(path))

    def remove_by_path(self, path: Path | str) -> ObjectField | None:
        """Remove and return the last field assigned at ``path``, if any."""
        path = Path.parse(path) if isinstance(path, str) else path
        for index in range(len(self.fields) - 1, -1, -1):
            entry = self.fields[index]
            if isinstance(entry, InclusionField):
                if entry.inclusion.val is not None:
                    return entry.inclusion.val.remove_by_path(path)
            elif isinstance(entry, KeyValueField):
                key = entry.key.as_path()
                if path.starts_with_segments(key):
                    rest = path.sub_path(len(key))
                    if rest is None:
                        return self.fields.pop(index)
                    if isinstance(entry.value, RawObject):
                        return entry.value.remove_by_path(rest)
        return None

    def remove_all_by_path(self, path: Path | str) -> list:
        """Remove every field assigned at ``path``; latest in the file first."""
        path = Path.parse(path) if isinstance(path, str) else path
        results: list = []
        doomed: list[int] = []
        for index in range(len(self.fields) - 1, -1, -1):
            entry = self.fields[index]
            if isinstance(entry, InclusionField):
                if entry.inclusion.val is not None:
                    results.extend(entry.inclusion.val.remove_all_by_path(path))
            elif isinstance(entry, KeyValueField):
                key = entry.key.as_path()
                if path.starts_with_segments(key):
                    rest = path.sub_path(len(key))
                    if rest is None:
                        doomed.append(index)
                    elif isinstance(entry.value, RawObject):
                        results.extend(entry.value.remove_all_by_path(rest))
        results.extend(self.fields.pop(index) for index in doomed)
        return results

    def merge(self, other: RawObject) -> RawObject:
        """A new object holding this object's fields followed by ``other``'s."""
        return RawObject(self.fields + other.fields)


@dataclass
class RawArray:
    """The elements of an array."""

    values: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = list(self.values)

    def __iter__(self) -> Iterator[RawValue]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return "[" + ", ".join(render(v) for v in self.values) + "]"


@dataclass
class Concat:
    """Adjacent values that concatenate into one."""

    values: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = list(self.values)
        for item in self.values:
            if isinstance(item, (Concat, AddAssign)):
                raise InvalidValue(raw_type(item), RAW_CONCAT_TYPE)

    def __iter__(self) -> Iterator[RawValue]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return " ".join(render(v) for v in self.values)


@dataclass
class AddAssign:
    """The right-hand side of a ``key += value`` field."""

    value: RawValue

    def __str__(self) -> str:
        return render(self.value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def raw_type(value: RawValue) -> str:
    """The type name of a raw value, such as ``object`` or ``quoted_string``."""
    if isinstance(value, RawObject):
        return RAW_OBJECT_TYPE
    if isinstance(value, RawArray):
        return RAW_ARRAY_TYPE
    if isinstance(value, bool):
        return RAW_BOOLEAN_TYPE
    if value is None:
        return RAW_NULL_TYPE
    if isinstance(value, RawString):
        return _STRING_TYPES[type(value).__name__]
    if _is_number(value):
        return RAW_NUMBER_TYPE
    if isinstance(value, Substitution):
        return RAW_SUBSTITUTION_TYPE
    if isinstance(value, Concat):
        return RAW_CONCAT_TYPE
    if isinstance(value, AddAssign):
        return RAW_ADD_ASSIGN_TYPE
    raise InvalidConversion(type(value).__name__, "raw value")


def is_simple_value(value: RawValue) -> bool:
    """True for booleans, null, strings, numbers and ``+=`` of one of those."""
    if isinstance(value, AddAssign):
        return is_simple_value(value.value)
    return value is None or isinstance(value, (bool, RawString)) or _is_number(value)


def render(value: RawValue) -> str:
    """Render a raw value in its compact display form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float):
        return repr(value)
    raw_type(value)
    return str(value)


def from_value(value: Any) -> RawValue:
    """Turn a resolved value (plain Python data) into a raw value."""
    if isinstance(value, dict):
        return RawObject(
            [KeyValueField(raw_string(key), from_value(item)) for key, item in value.items()]
        )
    if isinstance(value, (list, tuple)):
        return RawArray([from_value(item) for item in value])
    if value is None or isinstance(value, bool) or _is_number(value):
        return value
    if isinstance(value, str):
        return raw_string(value)
    raise InvalidConversion(type(value).__name__, "raw value")


def concat(values: Iterable[RawValue]) -> Concat:
    """Concatenate values; nested concatenations and ``+=`` are rejected."""
    return Concat(list(values))


def add_assign(value: RawValue) -> AddAssign:
    """Wrap the right-hand side of a ``+=`` field."""
    return AddAssign(value)


def raw_inclusion(inclusion: Inclusion) -> RawObject:
    """An object holding just the given inclusion."""
    return RawObject([InclusionField(inclusion)])
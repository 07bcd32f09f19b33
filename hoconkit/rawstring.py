"""Unresolved string forms, comments, substitutions and inclusions."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

from hoconkit.path import Path


class RawString(ABC):
    """A string as written in the source: quoted, unquoted, multiline or concatenated."""

    @abstractmethod
    def synthetic(self) -> str:
        """The string as it would be written in a HOCON document."""

    @abstractmethod
    def as_path(self) -> list[str]:
        """The key segments this string stands for."""

    def to_path(self) -> Path:
        """The key path this string stands for."""
        return Path.from_segments(self.as_path())


@dataclass(frozen=True)
class _Literal(RawString):
    value: str

    def as_path(self) -> list[str]:
        return [self.value]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QuotedString(_Literal):
    """A string in double quotes."""

    def synthetic(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class UnquotedString(_Literal):
    """A bare string."""

    def synthetic(self) -> str:
        return self.value


@dataclass(frozen=True)
class MultilineString(_Literal):
    """A string in triple quotes."""

    def synthetic(self) -> str:
        return f'"""{self.value}"""'


@dataclass(frozen=True)
class ConcatString(RawString):
    """Adjacent string fragments, each with the separator that followed it.

    Also used for path expressions, where the separator is ``"."``.
    The separator after the last fragment is ignored.
    """

    parts: tuple[tuple[RawString, str | None], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple((s, sep) for s, sep in self.parts))

    def _joined(self, render, sep_prefix: str) -> str:
        pieces = []
        last = len(self.parts) - 1
        for index, (string, separator) in enumerate(self.parts):
            pieces.append(render(string))
            if index != last and separator is not None:
                pieces.append(sep_prefix + separator)
        return "".join(pieces)

    def synthetic(self) -> str:
        return self._joined(lambda s: s.synthetic(), "")

    def __str__(self) -> str:
        return self._joined(str, " ")

    def as_path(self) -> list[str]:
        return [segment for string, _ in self.parts for segment in string.as_path()]

    def merge(self) -> QuotedString:
        """Collapse the fragments into a single quoted string."""
        return QuotedString(str(self))


def raw_string(text: str) -> RawString:
    """Wrap plain text: multiline if it holds a newline, quoted otherwise."""
    if "\n" in text:
        return MultilineString(text)
    return QuotedString(text)


class CommentType(enum.Enum):
    DOUBLE_SLASH = "//"
    HASH = "#"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Comment:
    """A comment with the marker that introduced it."""

    content: str
    kind: CommentType

    @classmethod
    def double_slash(cls, content: str) -> Comment:
        return cls(content, CommentType.DOUBLE_SLASH)

    @classmethod
    def hash(cls, content: str) -> Comment:
        return cls(content, CommentType.HASH)

    def __str__(self) -> str:
        return f"{self.kind.value}{self.content}"


@dataclass(frozen=True)
class Substitution:
    """A ``${path}`` or ``${?path}`` reference."""

    path: RawString
    optional: bool = False

    def __str__(self) -> str:
        marker = "?" if self.optional else ""
        return f"${{{marker}{self.path.synthetic()}}}"


class Location(enum.Enum):
    FILE = "file"
    URL = "url"
    CLASSPATH = "classpath"

    def __str__(self) -> str:
        return self.value


@dataclass
class Inclusion:
    """An ``include`` directive and, once loaded, the object it produced."""

    path: str
    required: bool = False
    location: Location | None = None
    val: Any = None

    def __str__(self) -> str:
        target = f'"{self.path}"'
        if self.location is not None:
            target = f"{self.location.value}({target})"
        if self.required:
            target = f"required({target})"
        return f"include {target}"


def _concat(parts: Iterable[tuple[RawString, str | None]]) -> ConcatString:
    return ConcatString(tuple(parts))
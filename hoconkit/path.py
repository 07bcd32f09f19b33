"""Dotted configuration paths such as ``a.b.c``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from hoconkit.errors import InvalidPathExpression


@dataclass(frozen=True, order=True)
class Path:
    """A non-empty, immutable sequence of key segments."""

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        if not segments:
            raise InvalidPathExpression("path is empty")
        object.__setattr__(self, "segments", segments)

    @classmethod
    def parse(cls, text: str) -> Path:
        """Parse a dotted path expression, rejecting empty segments."""
        trimmed = text.strip()
        if not trimmed:
            raise InvalidPathExpression("path is empty")
        if trimmed.startswith("."):
            raise InvalidPathExpression("leading period '.' not allowed")
        if trimmed.endswith("."):
            raise InvalidPathExpression("trailing period '.' not allowed")
        if ".." in trimmed:
            raise InvalidPathExpression("adjacent periods '..' not allowed")
        return cls.from_segments(trimmed.split("."))

    @classmethod
    def from_segments(cls, segments: Iterable[str]) -> Path:
        """Build a path from already separated segments."""
        return cls(tuple(segments))

    @property
    def first(self) -> str:
        return self.segments[0]

    @property
    def remainder(self) -> Path | None:
        return self.next()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __str__(self) -> str:
        return ".".join(self.segments)

    def sub_path(self, count: int) -> Path | None:
        """Drop ``count`` leading segments; ``None`` if nothing is left."""
        if count <= 0:
            return self
        if count >= len(self.segments):
            return None
        return Path(self.segments[count:])

    def next(self) -> Path | None:
        """The path without its first segment, or ``None``."""
        return self.sub_path(1)

    def tail(self) -> Path:
        """The last segment as a one-segment path."""
        return Path(self.segments[-1:])

    def joined(self, other: Path) -> Path:
        """A new path with ``other`` appended."""
        return Path(self.segments + other.segments)

    def starts_with(self, other: Path) -> bool:
        """True if ``other`` is a strict prefix of this path."""
        return (
            len(self.segments) > len(other.segments)
            and self.segments[: len(other.segments)] == other.segments
        )

    def starts_with_segments(self, segments: Sequence[str]) -> bool:
        """True if this path begins with the given, non-empty segments."""
        wanted = tuple(segments)
        if not wanted or len(wanted) > len(self.segments):
            return False
        return self.segments[: len(wanted)] == wanted
"""Exceptions raised while parsing and loading HOCON configuration."""

from __future__ import annotations

from typing import Iterable


class HoconError(Exception):
    """Base class for every error raised by this package."""


class ParseError(HoconError):
    """The input text is not valid HOCON.

    ``remaining`` is the unparsed input at the point of failure, and
    ``contexts`` lists the grammar rules that were active, innermost first.
    """

    def __init__(
        self,
        message: str,
        remaining: str | None = None,
        contexts: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.remaining = remaining
        self.contexts = tuple(contexts)


class InvalidPathExpression(HoconError):
    """A path expression such as ``a.b.c`` is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid path expression: {reason}")
        self.reason = reason


class InclusionCycle(HoconError):
    """A file was included more often than the configured depth allows."""

    def __init__(self, path: str) -> None:
        super().__init__(f"inclusion cycle detected: {path}")
        self.path = path


class InclusionNotFound(HoconError):
    """A required inclusion could not be found."""

    def __init__(self, path: str) -> None:
        super().__init__(f"required inclusion not found: {path}")
        self.path = path


class ConfigNotFound(HoconError):
    """No configuration file exists at the requested location."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DeserializeError(HoconError):
    """A document could not be turned into a configuration value."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidValue(HoconError):
    """A value of type ``val`` may not appear inside a ``ty``."""

    def __init__(self, val: str, ty: str) -> None:
        super().__init__(f"invalid value of type {val} inside {ty}")
        self.val = val
        self.ty = ty


class InvalidConversion(HoconError):
    """A value of one type cannot be converted to another."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"cannot convert {source} to {target}")
        self.source = source
        self.target = target
"""Supported configuration syntaxes."""

from __future__ import annotations

import enum
from functools import total_ordering


@total_ordering
class Syntax(enum.Enum):
    """A configuration syntax; its value is the usual file extension."""

    HOCON = "conf"
    JSON = "json"
    PROPERTIES = "properties"

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Syntax):
            return NotImplemented
        return _RANK[self] < _RANK[other]


_RANK = {syntax: index for index, syntax in enumerate(Syntax)}
"""Resolved configuration values, held as plain Python data.

A value is one of: ``dict`` (str keys), ``list``, ``bool``, ``None``,
``str``, ``int`` or ``float``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any, Union

from hoconkit.errors import DeserializeError, InvalidConversion

Value = Union[dict, list, bool, None, str, int, float]


def type_name(value: Value) -> str:
    """The name of the value's kind: Object, Array, Boolean, Null, String or Number."""
    if isinstance(value, dict):
        return "Object"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, bool):
        return "Boolean"
    if value is None:
        return "Null"
    if isinstance(value, str):
        return "String"
    if isinstance(value, (int, float)):
        return "Number"
    raise InvalidConversion(type(value).__name__, "value")


def get_by_path(value: Value, paths: Sequence[str]) -> Value:
    """Follow ``paths`` through nested objects.

    Returns ``None`` when ``paths`` is empty or a key is missing. A segment
    met while the current value is not an object is passed over, leaving
    that value as the result.
    """
    if isinstance(paths, str):
        paths = [paths]
    if not paths:
        return None
    current = value
    for segment in paths:
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
    return current


def with_fallback(value: Value, fallback: Value) -> Value:
    """Merge ``fallback`` under ``value``; ``value`` wins except where both are objects.

    Neither argument is modified.
    """
    if not (isinstance(value, dict) and isinstance(fallback, dict)):
        return value
    merged = dict(value)
    for key, fb_val in fallback.items():
        if key in merged:
            existing = merged[key]
            if isinstance(existing, dict) and isinstance(fb_val, dict):
                merged[key] = with_fallback(existing, fb_val)
        else:
            merged[key] = fb_val
    return merged


def render(value: Value) -> str:
    """A compact, human readable rendering of ``value``."""
    if isinstance(value, dict):
        body = ", ".join(f"{key} = {render(item)}" for key, item in value.items())
        return "{" + body + "}"
    if isinstance(value, list):
        return "[" + ", ".join(render(item) for item in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return repr(value)
    raise InvalidConversion(type(value).__name__, "value")


def from_python(obj: Any) -> Value:
    """Convert Python data into a value.

    Mappings become objects, lists and tuples become arrays, and
    non-finite floats become ``None``. Anything else is rejected.
    """
    if obj is None or isinstance(obj, (bool, str)):
        return obj
    if isinstance(obj, int):
        return int(obj)
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, Mapping):
        result = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise InvalidConversion(type(key).__name__, "object key")
            result[key] = from_python(item)
        return result
    if isinstance(obj, (list, tuple)):
        return [from_python(item) for item in obj]
    raise InvalidConversion(type(obj).__name__, "value")


def to_json(value: Value) -> str:
    """Serialise ``value`` as JSON text."""
    return json.dumps(from_python(value), ensure_ascii=False)


def _reject_constant(name: str) -> Any:
    raise DeserializeError(f"invalid number: {name}")


def from_json(text: str | bytes) -> Value:
    """Parse JSON text into a value."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except DeserializeError:
        raise
    except (ValueError, TypeError) as error:
        raise DeserializeError(str(error)) from error
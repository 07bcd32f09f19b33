"""Loading configuration documents from files, URLs, text and the environment."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterator, Union
from urllib.parse import urlsplit
from urllib.request import url2pathname, urlopen

from hoconkit.errors import ConfigNotFound, DeserializeError, InclusionNotFound
from hoconkit.grammar import parse
from hoconkit.options import ConfigParseOptions
from hoconkit.raw import KeyValueField, RawObject, from_value, raw_type
from hoconkit.rawstring import Inclusion, Location, QuotedString, raw_string
from hoconkit.syntax import Syntax
from hoconkit.value import from_json

PathLike = Union[str, "os.PathLike[str]"]

_CONTENT_TYPES = {
    "application/json": Syntax.JSON,
    "text/x-java-properties": Syntax.PROPERTIES,
    "application/hocon": Syntax.HOCON,
}

_PROPERTY_SPACE = " \t\f"
_PROPERTY_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_PROPERTY_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _syntax_from_extension(path: Path) -> Syntax | None:
    extension = path.suffix[1:].lower()
    if not extension:
        return None
    try:
        return Syntax(extension)
    except ValueError:
        return None


def _read(path: Path, syntax: Syntax) -> str:
    data = path.read_bytes()
    encoding = "latin-1" if syntax is Syntax.PROPERTIES else "utf-8"
    return data.decode(encoding)


def _load_text(
    text: str, syntax: Syntax, options: ConfigParseOptions | None
) -> RawObject:
    if syntax is Syntax.HOCON:
        return load_hocon(text, options)
    if syntax is Syntax.JSON:
        return load_json(text)
    return load_properties(text)


def load_from_file(
    path: PathLike,
    options: ConfigParseOptions | None = None,
    syntax: Syntax | None = None,
) -> RawObject:
    """Load a configuration file.

    The syntax is taken from ``syntax``, else from the file extension. When
    neither settles it, ``<path>.conf``, ``<path>.json`` and
    ``<path>.properties`` are all tried and whatever exists is merged, later
    syntaxes taking precedence.
    """
    path = Path(path)
    chosen = syntax if syntax is not None else _syntax_from_extension(path)
    if chosen is not None:
        return _load_text(_read(path, chosen), chosen, options)

    found: list[RawObject] = []
    for candidate in sorted(Syntax):
        file = Path(f"{path}.{candidate.value}")
        try:
            text = _read(file, candidate)
        except OSError:
            continue
        found.append(_load_text(text, candidate, options))
    if not found:
        raise ConfigNotFound(
            "No configuration file (.conf, .json, .properties) was found "
            f"at the given path: {path}"
        )
    merged = RawObject()
    for obj in found:
        merged = merged.merge(obj)
    return merged


def _file_url_to_path(url: str) -> Path:
    return Path(url2pathname(urlsplit(url).path))


def load_from_url(
    url: str,
    options: ConfigParseOptions | None = None,
    syntax: Syntax | None = None,
) -> RawObject:
    """Load a configuration from a URL.

    ``file:`` URLs are read from disk. For other URLs the syntax follows the
    response's content type, defaulting to HOCON.
    """
    url = str(url)
    if urlsplit(url).scheme == "file":
        return load_from_file(_file_url_to_path(url), options, syntax)
    with urlopen(url) as response:
        headers = response.headers
        detected = _CONTENT_TYPES.get(headers.get_content_type(), Syntax.HOCON)
        default_charset = "latin-1" if detected is Syntax.PROPERTIES else "utf-8"
        charset = headers.get_content_charset() or default_charset
        text = response.read().decode(charset)
    return _load_text(text, detected, options)


def load_hocon(text: str, options: ConfigParseOptions | None = None) -> RawObject:
    """Parse HOCON text, loading its inclusions."""
    if options is None:
        options = ConfigParseOptions()
    return parse(text, options, resolve_inclusion)


def load_json(text: str | bytes) -> RawObject:
    """Parse a JSON document whose root must be an object."""
    raw = from_value(from_json(text))
    if not isinstance(raw, RawObject):
        raise DeserializeError(
            "JSON must have an object as the root when parsing into HOCON, "
            f"but got {raw_type(raw)}"
        )
    return raw


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    lines = iter(_LINE_BREAK.split(text))
    for line in lines:
        line = line.lstrip(_PROPERTY_SPACE)
        if not line or line[0] in "#!":
            continue
        while _continues(line):
            line = line[:-1]
            following = next(lines, None)
            if following is None:
                break
            line += following.lstrip(_PROPERTY_SPACE)
        yield line


def _split_property(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=:" or char in _PROPERTY_SPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_PROPERTY_SPACE)
    if rest[:1] in ("=", ":") and rest:
        rest = rest[1:].lstrip(_PROPERTY_SPACE)
    return key, rest


def _unescape_property(text: str) -> str:
    def replace(match: re.Match) -> str:
        escaped = match.group(1)
        if len(escaped) == 5:
            return chr(int(escaped[1:], 16))
        return _PROPERTY_ESCAPES.get(escaped, escaped)

    return _PROPERTY_ESCAPE.sub(replace, text)


def load_properties(text: str) -> RawObject:
    """Parse a Java properties document; every value becomes a quoted string."""
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_property(line)
        properties[_unescape_property(key)] = _unescape_property(value)
    return RawObject(
        [KeyValueField(raw_string(key), QuotedString(value)) for key, value in properties.items()]
    )


def load_environments() -> RawObject:
    """An object holding every environment variable as a quoted string."""
    return RawObject(
        [KeyValueField(raw_string(key), QuotedString(value)) for key, value in os.environ.items()]
    )


def load_conf(name: str) -> str:
    """Read ``resources/<name>.conf`` relative to the working directory."""
    return Path(f"resources/{name}.conf").read_text(encoding="utf-8")


def _is_remote(target: str) -> bool:
    scheme = urlsplit(target).scheme
    return len(scheme) > 1 and scheme != "file"


def _include_file(inclusion: Inclusion, options: ConfigParseOptions) -> RawObject:
    target: PathLike = inclusion.path
    if urlsplit(inclusion.path).scheme == "file":
        target = _file_url_to_path(inclusion.path)
    try:
        return load_from_file(target, options)
    except FileNotFoundError as error:
        if inclusion.required:
            raise InclusionNotFound(inclusion.path) from error
        raise


def _include_url(inclusion: Inclusion, options: ConfigParseOptions) -> RawObject:
    if len(urlsplit(inclusion.path).scheme) <= 1:
        raise ConfigNotFound(f"invalid URL: {inclusion.path}")
    try:
        return load_from_url(inclusion.path, options)
    except OSError as error:
        if inclusion.required:
            raise InclusionNotFound(inclusion.path) from error
        raise


def resolve_inclusion(inclusion: Inclusion, options: ConfigParseOptions) -> RawObject:
    """Load what ``inclusion`` points at, store it in ``inclusion.val`` and return it.

    Raises :class:`InclusionCycle` when the same path is included more often
    than ``options.max_include_depth`` allows.
    """
    options.register_include(inclusion.path)
    location = inclusion.location
    if location is Location.URL or (location is None and _is_remote(inclusion.path)):
        loaded = _include_url(inclusion, options)
    else:
        loaded = _include_file(inclusion, options)
    inclusion.val = loaded
    return loaded
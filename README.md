# hoconkit

hoconkit reads HOCON configuration (the human-friendly JSON superset),
plain JSON and Java `.properties` files. It turns them into a raw syntax
tree that keeps comments, includes, substitutions, concatenations and
`+=` fields as they were written. It also has helpers for working with
plain configuration values held as Python data.

## Installation

```
pip install hoconkit
```

To run the test suite:

```
pip install "hoconkit[test]"
pytest
```

## Parsing HOCON text

```python
from hoconkit.loader import load_hocon

raw = load_hocon("""
# service settings
server {
  host = localhost
  port = 8080
}
server.timeout = 30s
paths += "/var/data"
""", None)
```

`load_hocon` returns a `hoconkit.raw.RawObject`, an ordered list of fields
(`KeyValueField`, `InclusionField`, `NewlineCommentField`) in which
duplicate keys are kept. Syntax errors raise `hoconkit.errors.ParseError`.
Its `remaining` attribute holds the text that could not be parsed and its
`contexts` attribute names the grammar rules involved.

A `RawObject` can be queried and edited by path:

- `get_by_path(path)` returns the value last assigned at the path, looking
  into nested objects and loaded inclusions. It raises `KeyError` when
  nothing is assigned there.
- `remove_by_path(path)` removes the last such field and returns it.
- `remove_all_by_path(path)` removes every such field and returns them,
  latest first.
- `merge(other)` returns a new object with the fields of both.

The path may be a `Path` or a dotted string.

The lower-level parsers take the input text and return a pair of what
was parsed and the remaining text:

- `hoconkit.grammar`: `parse`, `parse_value`, `parse_array`, `parse_object`,
  `parse_root_object`, `parse_key_value`, `parse_add_assign`,
  `parse_comment`, `parse_substitution`, `parse_include`,
  `next_element_whitespace`
- `hoconkit.strings`: `parse_quoted_string`, `parse_unquoted_string`,
  `parse_multiline_string`, `parse_key`, `parse_path_expression`,
  `parse_string`
- `hoconkit.numbers`: `parse_number`. Integers come back as `int`; values
  with a fraction or an exponent come back as `float`.
- `hoconkit.scalars`: `parse_boolean`, `parse_null`, plus the whitespace
  helpers

`hoconkit.grammar.parse(text, options, resolver)` calls
`resolver(inclusion, options)` for each `include` directive. Without a
resolver, inclusions are left unloaded.

## Loading files

```python
from hoconkit.loader import load_from_file
from hoconkit.syntax import Syntax

raw = load_from_file("application.conf", None, None)
data = load_from_file("settings.json", None, Syntax.JSON)
```

The syntax comes from the argument if you give one, else from the file
extension (`.conf`, `.json`, `.properties`). For a path with no known
extension, `<path>.conf`, `<path>.json` and `<path>.properties` are each
tried. Whatever exists is merged in that order. If none exists,
`ConfigNotFound` is raised.

`load_from_url` reads `file:` URLs from disk. For other URLs it fetches
the document and picks the syntax from the content type
(`application/json`, `text/x-java-properties`, otherwise HOCON).

`include` directives in text loaded through `load_hocon` or
`load_from_file` are resolved while parsing by `resolve_inclusion`:

- `file(...)`, `classpath(...)` and plain paths are read as files relative
  to the working directory.
- `url(...)` and paths with a URL scheme are fetched.
- A path included more often than
  `ConfigParseOptions.max_include_depth` (default 50) raises
  `InclusionCycle`.
- A missing `required(...)` include raises `InclusionNotFound`. A missing
  optional include raises the underlying `OSError`.

`load_json` and `load_properties` take document text directly. JSON must
have an object at its root. Every property value becomes a quoted string.
`load_environments` builds an object from the process environment.
`load_conf(name)` reads `resources/<name>.conf`.

## Paths

```python
from hoconkit.path import Path

p = Path.parse("server.http.port")
str(p)                                # "server.http.port"
p.starts_with(Path.parse("server"))   # True
p.sub_path(1)                         # Path(segments=('http', 'port'))
```

Empty paths, leading or trailing dots and `..` raise
`InvalidPathExpression`.

## Working with values

`hoconkit.value` works on plain Python values (dicts, lists, strings,
numbers, booleans and `None`):

```python
from hoconkit.value import with_fallback, get_by_path

merged = with_fallback({"a": {"x": 1}}, {"a": {"y": 2}, "b": True})
get_by_path(merged, ["a", "y"])   # 2
```

The same module has `from_json`, `to_json`, `from_python`, `render` and
`type_name`. `hoconkit.raw.from_value` turns such a value into a raw
value.

## What it does not do

hoconkit stops at the raw syntax tree. It does not resolve `${...}`
substitutions, apply `+=` or concatenations, or merge duplicate keys into
a final configuration value. Classpath includes are read as ordinary
files. There is no command-line tool.

## Errors

All errors the package defines derive from `hoconkit.errors.HoconError`.
These are:

- `ParseError`
- `InvalidPathExpression`
- `InclusionCycle`
- `InclusionNotFound`
- `ConfigNotFound`
- `DeserializeError`
- `InvalidValue`
- `InvalidConversion`

File and network failures surface as the standard `OSError` family.
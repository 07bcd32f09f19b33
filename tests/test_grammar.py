import pytest

from hoconkit.errors import InclusionCycle, ParseError
from hoconkit.grammar import (
    next_element_whitespace,
    parse,
    parse_add_assign,
    parse_array,
    parse_comment,
    parse_include,
    parse_key_value,
    parse_object,
    parse_root_object,
    parse_substitution,
    parse_value,
)
from hoconkit.options import ConfigParseOptions
from hoconkit.raw import (
    AddAssign,
    Concat,
    InclusionField,
    KeyValueField,
    NewlineCommentField,
    RawArray,
    RawObject,
)
from hoconkit.rawstring import (
    Comment,
    CommentType,
    ConcatString,
    QuotedString,
    Substitution,
    UnquotedString,
)


def test_next_element_whitespace():
    assert next_element_whitespace("  , hello = world") == (None, " hello = world")
    assert next_element_whitespace("  ,, hello = world") == (None, ", hello = world")


def test_parse_value_empty_fails():
    with pytest.raises(ParseError):
        parse_value("")


def test_parse_value_quoted():
    value, rest = parse_value('"world"}')
    assert value == QuotedString("world")
    assert rest == "}"


def test_parse_value_concatenation():
    value, rest = parse_value("true false ${?a}")
    assert rest == ""
    assert value == Concat(
        [
            ConcatString(((UnquotedString("true"), " "), (UnquotedString("false"), " "))),
            Substitution(UnquotedString("a"), True),
        ]
    )


def test_parse_value_substitution_then_string():
    value, rest = parse_value("${a} foo")
    assert rest == ""
    assert value == Concat([Substitution(UnquotedString("a")), UnquotedString("foo")])


def test_parse_array():
    array, rest = parse_array("[1,2, 3,4  5.0]")
    assert rest == ""
    assert array == RawArray(
        [
            1,
            2,
            3,
            ConcatString(((UnquotedString("4"), "  "), (UnquotedString("5.0"), None))),
        ]
    )


def test_parse_array_requires_closing_bracket():
    with pytest.raises(ParseError):
        parse_array("[1, 2")


@pytest.mark.parametrize(
    "text, expected, rest",
    [
        ("//foo\nbar", Comment("foo", CommentType.DOUBLE_SLASH), "bar"),
        ("###//foo\nbar", Comment("##//foo", CommentType.HASH), "bar"),
        ("# /foo\nbar", Comment(" /foo", CommentType.HASH), "bar"),
        (
            '  //  include "demo.conf" // comment',
            Comment('  include "demo.conf" // comment', CommentType.DOUBLE_SLASH),
            "",
        ),
        ("# x\r\nnext", Comment(" x", CommentType.HASH), "next"),
    ],
)
def test_parse_comment(text, expected, rest):
    assert parse_comment(text) == (expected, rest)


def test_parse_comment_rejects_plain_text():
    with pytest.raises(ParseError):
        parse_comment("foo")


@pytest.mark.parametrize(
    "text, key, value, rest",
    [
        ("hello=world", UnquotedString("hello"), UnquotedString("world"), ""),
        ("hello= \tworld", UnquotedString("hello"), UnquotedString("world"), ""),
        ("\nhello= \r\nworld", UnquotedString("hello"), UnquotedString("world"), ""),
        ('\n"foo"= \r\n"bar"', QuotedString("foo"), QuotedString("bar"), ""),
        ("hello : world\n", UnquotedString("hello"), UnquotedString("world"), "\n"),
        ("hello : world,\n", UnquotedString("hello"), UnquotedString("world"), ",\n"),
        (
            "hello : {a = 1},\n",
            UnquotedString("hello"),
            RawObject([KeyValueField(UnquotedString("a"), 1)]),
            ",\n",
        ),
    ],
)
def test_parse_key_value(text, key, value, rest):
    assert parse_key_value(text) == ((key, value), rest)


def test_parse_key_value_without_separator_fails():
    with pytest.raises(ParseError):
        parse_key_value("a += 1")


def test_parse_add_assign():
    (key, value), rest = parse_add_assign("a += 1")
    assert key == UnquotedString("a")
    assert value == AddAssign(1)
    assert rest == ""


@pytest.mark.parametrize(
    "text, expected, rest",
    [
        ('${? "a .".b. c}', '${?"a .".b. c}', ""),
        ("${? a.b.c}", "${?a.b.c}", ""),
        ('${ "a .".b. c / }', '${"a .".b. c /}', ""),
        ("${foo}", "${foo}", ""),
        ('${"".foo}abc', '${"".foo}', "abc"),
        ('${"""a""".\" b.\". c }', '${"""a""".\" b.\". c}', ""),
    ],
)
def test_valid_substitution(text, expected, rest):
    substitution, remaining = parse_substitution(text)
    assert str(substitution) == expected
    assert remaining == rest


@pytest.mark.parametrize(
    "text",
    ["${}", "$ {a.b}", "${\na}", "$\n{foo.bar}", "${foo.\nbar}"],
)
def test_invalid_substitution(text):
    with pytest.raises(ParseError):
        parse_substitution(text)


@pytest.mark.parametrize(
    "text, expected, rest",
    [
        ('include "resources/demo.conf"', 'include "resources/demo.conf"', ""),
        ('include"demo.conf"', 'include "demo.conf"', ""),
        ('include file("demo.conf")', 'include file("demo.conf")', ""),
        ('include required("demo.conf")', 'include required("demo.conf")', ""),
        (
            'include required( classpath("demo.conf"))',
            'include required(classpath("demo.conf"))',
            "",
        ),
        ('include required(url("demo.conf"))', 'include required(url("demo.conf"))', ""),
        (
            'include required( url( "demo.conf" ) )',
            'include required(url("demo.conf"))',
            "",
        ),
        ('include "resources/demo.conf"abc', 'include "resources/demo.conf"', "abc"),
    ],
)
def test_valid_include(text, expected, rest):
    inclusion, remaining = parse_include(text)
    assert str(inclusion) == expected
    assert remaining == rest
    assert inclusion.val is None


@pytest.mark.parametrize(
    "text",
    [
        "include resources/demo.conf",
        'include required (classpath("demo.conf"))',
        'include required(classpath ("demo.conf"))',
        'include required ("demo.conf")',
    ],
)
def test_invalid_include(text):
    with pytest.raises(ParseError):
        parse_include(text)


def test_parse_object_empty_and_nested():
    assert parse_object("{}") == (RawObject([]), "")
    obj, rest = parse_object("{ a { b = x } }tail")
    assert rest == "tail"
    assert obj.get_by_path("a.b") == UnquotedString("x")


def test_parse_root_object_with_comments():
    obj, rest = parse_root_object("a = 1, // note\n# standalone\nb = 2")
    assert rest == ""
    assert obj == RawObject(
        [
            KeyValueField(UnquotedString("a"), 1, Comment(" note", CommentType.DOUBLE_SLASH)),
            NewlineCommentField(Comment(" standalone", CommentType.HASH)),
            KeyValueField(UnquotedString("b"), 2),
        ]
    )


def test_parse_braced_and_unbraced_documents():
    assert parse("{a = 1}") == RawObject([KeyValueField(UnquotedString("a"), 1)])
    doc = parse("a = 1\nb.c = [true, null]\nd += 3\n")
    assert doc.get_by_path("a") == 1
    assert doc.get_by_path("b.c") == RawArray([True, None])
    assert doc.get_by_path("d") == AddAssign(3)


@pytest.mark.parametrize("text", ["a = [1", "{a = 1} extra", "{a = 1"])
def test_parse_rejects_invalid_documents(text):
    with pytest.raises(ParseError):
        parse(text)


def test_parse_leaves_inclusions_unloaded_without_resolver():
    doc = parse('include "other.conf"\nkey = 1')
    first = doc.fields[0]
    assert isinstance(first, InclusionField)
    assert first.inclusion.path == "other.conf"
    assert first.inclusion.val is None


def test_parse_uses_resolver_and_options():
    options = ConfigParseOptions(max_include_depth=3)
    seen = []

    def resolver(inclusion, opts):
        seen.append((inclusion.path, opts))
        return RawObject.from_pairs([("x", 1)])

    doc = parse('include "other.conf"\nkey = 1', options, resolver)
    assert seen == [("other.conf", options)]
    assert seen[0][1] is options
    assert doc.get_by_path("x") == 1
    assert doc.get_by_path("key") == 1


def test_resolver_parse_error_is_not_backtracked():
    def resolver(inclusion, options):
        raise ParseError("broken include", "", ["parse"])

    with pytest.raises(ParseError, match="broken include"):
        parse('include "bad.conf"', None, resolver)


def test_resolver_failure_propagates():
    def resolver(inclusion, options):
        raise InclusionCycle(inclusion.path)

    with pytest.raises(InclusionCycle) as info:
        parse('a = 1\ninclude "loop.conf"', None, resolver)
    assert info.value.path == "loop.conf"
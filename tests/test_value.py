import pytest

from hoconkit.errors import DeserializeError, InvalidConversion
from hoconkit.value import (
    from_json,
    from_python,
    get_by_path,
    render,
    to_json,
    type_name,
    with_fallback,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ({}, "Object"),
        ([], "Array"),
        (True, "Boolean"),
        (None, "Null"),
        ("s", "String"),
        (3, "Number"),
        (2.5, "Number"),
    ],
)
def test_type_name(value, expected):
    assert type_name(value) == expected


def test_type_name_rejects_unknown():
    with pytest.raises(InvalidConversion):
        type_name(object())


def test_get_by_path_nested():
    data = {"a": {"b": {"c": 7}}}
    assert get_by_path(data, ["a", "b", "c"]) == 7
    assert get_by_path(data, ["a", "b"]) == {"c": 7}


def test_get_by_path_missing_and_empty():
    data = {"a": {"b": 1}}
    assert get_by_path(data, ["a", "x"]) is None
    assert get_by_path(data, []) is None


def test_get_by_path_skips_segments_past_scalar():
    data = {"a": 5}
    assert get_by_path(data, ["a", "b"]) == 5


def test_with_fallback_deep_merge():
    primary = {"a": {"x": 1}, "b": 2}
    fallback = {"a": {"x": 9, "y": 3}, "b": {"z": 1}, "c": 4}
    merged = with_fallback(primary, fallback)
    assert merged == {"a": {"x": 1, "y": 3}, "b": 2, "c": 4}


def test_with_fallback_leaves_inputs_untouched():
    primary = {"a": {"x": 1}}
    fallback = {"a": {"y": 2}}
    with_fallback(primary, fallback)
    assert primary == {"a": {"x": 1}}
    assert fallback == {"a": {"y": 2}}


def test_with_fallback_non_object_prefers_self():
    assert with_fallback([1], {"a": 1}) == [1]
    assert with_fallback("s", "t") == "s"


def test_render_scalars():
    assert render(None) == "null"
    assert render(True) == "true"
    assert render("plain") == "plain"


def test_render_compound():
    assert render({"a": [1, False]}) == "{a = [1, false]}"


def test_from_python_converts_tuples_and_nan():
    assert from_python({"a": (1, 2)}) == {"a": [1, 2]}
    assert from_python(float("nan")) is None


def test_from_python_rejects_bad_keys_and_types():
    with pytest.raises(InvalidConversion):
        from_python({1: "x"})
    with pytest.raises(InvalidConversion):
        from_python({1, 2})


def test_json_round_trip():
    data = {"name": "cfg", "items": [1, 2.5, None, True], "nested": {"k": "v"}}
    assert from_json(to_json(data)) == data


def test_from_json_rejects_invalid():
    with pytest.raises(DeserializeError):
        from_json("{not json")
    with pytest.raises(DeserializeError):
        from_json("[NaN]")
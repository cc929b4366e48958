import re
from array import array
from collections import OrderedDict
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace
from urllib.parse import urlparse, urlsplit

import pytest

from converter import (
    HOLE,
    UNDEFINED,
    BigInt,
    BoxedBoolean,
    BoxedNumber,
    BoxedString,
    Converter,
    URLSearchParams,
    UnsupportedValueError,
    convert,
    is_plain_object,
)


def _literal(value):
    return {"type": "Literal", "value": value}


def _array(*elements):
    return {"type": "ArrayExpression", "elements": list(elements)}


def _new(name, *arguments):
    return {
        "type": "NewExpression",
        "callee": {"type": "Identifier", "name": name},
        "arguments": list(arguments),
    }


def _property(key, value):
    return {
        "type": "Property",
        "method": False,
        "shorthand": False,
        "computed": False,
        "kind": "init",
        "key": _literal(key),
        "value": value,
    }


def test_lists_and_tuples_become_arrays():
    assert convert([1, "a", None]) == _array(_literal(1), _literal("a"), _literal(None))
    assert convert((True,)) == _array(_literal(True))
    assert convert([]) == _array()


def test_holes_become_empty_slots():
    node = convert([1, HOLE, 3])
    assert node["elements"][0] == _literal(1)
    assert node["elements"][1] is None
    assert node["elements"][2] == _literal(3)


def test_undefined_inside_an_array_is_not_a_hole():
    assert convert([UNDEFINED]) == _array({"type": "Identifier", "name": "undefined"})


@pytest.mark.parametrize(
    "value, name, inner",
    [
        (BoxedBoolean(False), "Boolean", _literal(False)),
        (BoxedNumber(3), "Number", _literal(3)),
        (BoxedString("text"), "String", _literal("text")),
    ],
)
def test_boxed_primitives(value, name, inner):
    assert convert(value) == _new(name, inner)


def test_boxed_negative_number_keeps_the_sign_rule():
    node = convert(BoxedNumber(-2))
    assert node["arguments"][0]["type"] == "UnaryExpression"


def test_regular_expression_literal():
    pattern = re.compile("ab+c", re.IGNORECASE | re.MULTILINE)
    assert convert(pattern) == {
        "type": "Literal",
        "value": pattern,
        "regex": {"pattern": "ab+c", "flags": "im"},
    }


def test_regular_expression_source_is_escaped():
    assert convert(re.compile("a/b"))["regex"]["pattern"] == "a\\/b"
    assert convert(re.compile(r"a\/b"))["regex"]["pattern"] == "a\\/b"
    assert convert(re.compile(""))["regex"]["pattern"] == "(?:)"
    assert convert(re.compile("a.b", re.DOTALL))["regex"]["flags"] == "s"


@pytest.mark.parametrize(
    "pattern, source",
    [
        ("a\nb", "a\\nb"),
        ("a\rb", "a\\rb"),
        ("a\u2028b", "a\\u2028b"),
        ("a\u2029b", "a\\u2029b"),
        ("a\\\rb", "a\\rb"),
    ],
)
def test_regular_expression_line_terminators_are_escaped(pattern, source):
    assert convert(re.compile(pattern))["regex"]["pattern"] == source


def test_unsupported_regular_expressions():
    with pytest.raises(UnsupportedValueError):
        convert(re.compile(b"bytes"))
    with pytest.raises(UnsupportedValueError):
        convert(re.compile("a  # comment", re.VERBOSE))


@pytest.mark.parametrize("pattern", ["(?i)abc", "a(?i:b)c", "(?-i:x)", "(?ms)^a"])
def test_inline_regular_expression_flags_are_rejected(pattern):
    value = re.compile(pattern)
    with pytest.raises(UnsupportedValueError) as excinfo:
        convert(value)
    assert excinfo.value.cause is value


def test_escaped_parenthesis_is_not_an_inline_flag():
    assert convert(re.compile(r"\(\?i\)"))["regex"]["pattern"] == r"\(\?i\)"


def test_ascii_regular_expression_records_a_diagnostic():
    converter = Converter()
    node = converter.convert(re.compile(r"\w+", re.ASCII))
    assert node["regex"]["flags"] == ""
    assert converter.diagnostics


def test_aware_datetime_uses_epoch_milliseconds():
    moment = datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert convert(moment) == _new("Date", _literal(1577836800000))


def test_datetime_with_offset():
    moment = datetime(2020, 1, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    assert convert(moment) == _new("Date", _literal(1577836800000))


def test_naive_datetime_is_read_as_utc():
    converter = Converter()
    node = converter.convert(datetime(1970, 1, 1, 0, 0, 1))
    assert node == _new("Date", _literal(1000))
    assert "interpreted as UTC" in converter.diagnostics[0]


def test_dates_before_the_epoch_are_negated():
    node = convert(datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc))
    assert node["arguments"][0] == {
        "type": "UnaryExpression",
        "operator": "-",
        "prefix": True,
        "argument": _literal(1),
    }


def test_plain_date_is_midnight_utc():
    assert convert(date(1970, 1, 2)) == _new("Date", _literal(86400000))


@pytest.mark.parametrize("value", [b"\x00\xff", bytearray(b"\x00\xff"), memoryview(b"\x00\xff")])
def test_byte_buffers(value):
    assert convert(value) == {
        "type": "CallExpression",
        "optional": False,
        "callee": {
            "type": "MemberExpression",
            "computed": False,
            "optional": False,
            "object": {"type": "Identifier", "name": "Buffer"},
            "property": {"type": "Identifier", "name": "from"},
        },
        "arguments": [_array(_literal(0), _literal(255))],
    }


@pytest.mark.parametrize(
    "typecode, name",
    [
        ("b", "Int8Array"),
        ("B", "Uint8Array"),
        ("h", "Int16Array"),
        ("H", "Uint16Array"),
        ("i", "Int32Array"),
        ("I", "Uint32Array"),
    ],
)
def test_integer_typed_arrays(typecode, name):
    assert convert(array(typecode, [1, 2])) == _new(name, _array(_literal(1), _literal(2)))


def test_float_typed_arrays():
    assert convert(array("f", [0.5])) == _new("Float32Array", _array(_literal(0.5)))
    assert convert(array("d", [0.25])) == _new("Float64Array", _array(_literal(0.25)))


def test_64_bit_typed_arrays_hold_bigints():
    assert convert(array("q", [7])) == _new(
        "BigInt64Array", _array({"type": "Literal", "value": 7, "bigint": "7"})
    )
    assert convert(array("Q", [7]))["callee"]["name"] == "BigUint64Array"


def test_signed_typed_array_negatives():
    node = convert(array("b", [-3]))
    assert node["arguments"][0]["elements"][0]["type"] == "UnaryExpression"


def test_maps_hold_entry_pairs_in_order():
    assert convert({1: "a", "b": 2}) == _new(
        "Map",
        _array(
            _array(_literal(1), _literal("a")),
            _array(_literal("b"), _literal(2)),
        ),
    )


def test_dict_subclasses_are_maps():
    node = convert(OrderedDict([("a", 1)]))
    assert node == _new("Map", _array(_array(_literal("a"), _literal(1))))


@pytest.mark.parametrize("value", [{"x"}, frozenset({"x"})])
def test_sets(value):
    assert convert(value) == _new("Set", _array(_literal("x")))


def test_urls():
    assert convert(urlsplit("https://example.com/a?b=1")) == _new(
        "URL", _literal("https://example.com/a?b=1")
    )
    assert convert(urlparse("https://example.com/"))["callee"]["name"] == "URL"


def test_url_search_params():
    assert convert(URLSearchParams("a=1&b=2")) == _new("URLSearchParams", _literal("a=1&b=2"))
    assert str(URLSearchParams({"q": "a b"})) == "q=a+b"
    assert str(URLSearchParams([("x", "1"), ("x", "2")])) == "x=1&x=2"


def test_plain_records_become_object_expressions():
    assert convert({"a": 1, "b": 2}) == {
        "type": "ObjectExpression",
        "properties": [_property("a", _literal(1)), _property("b", _literal(2))],
    }


def test_nested_records():
    node = convert({"outer": {"inner": [BigInt(1)]}})
    inner = node["properties"][0]["value"]["properties"][0]
    assert inner["key"] == _literal("inner")
    assert inner["value"] == _array({"type": "Literal", "value": 1, "bigint": "1"})


def test_simple_namespace_is_a_plain_record():
    assert convert(SimpleNamespace(x=1)) == {
        "type": "ObjectExpression",
        "properties": [_property("x", _literal(1))],
    }


def test_plain_object_detection():
    assert is_plain_object({})
    assert is_plain_object({"a": 1})
    assert is_plain_object(SimpleNamespace())
    assert not is_plain_object({1: "a"})
    assert not is_plain_object(OrderedDict())
    assert not is_plain_object([])
    assert not is_plain_object(object())


def test_input_is_not_mutated():
    value = {"a": [1, HOLE], "b": {2, 3}}
    snapshot = {"a": [1, HOLE], "b": {2, 3}}
    convert(value)
    assert value == snapshot

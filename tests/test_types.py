from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from types import SimpleNamespace

from keywords import SchemaType
from keywords.types import (
    is_list_like, is_mapping_like, is_numeric,
    is_stringified_bool, is_stringified_int,
)


@dataclass
class Point:
    x: int
    y: int


def test_schema_type_parse():
    assert SchemaType.parse("integer") is SchemaType.INTEGER
    assert SchemaType.parse(SchemaType.ARRAY) is SchemaType.ARRAY
    assert SchemaType.parse("Integer") is None
    assert SchemaType.parse("null") is None
    assert SchemaType.parse(None) is None
    assert SchemaType.parse(["string"]) is None
    assert SchemaType.names() == ["object", "array", "boolean", "number", "integer", "string"]


def test_sequences_are_list_like_not_mapping_like():
    for value in ([], [1, 2, 3], (1, "a"), {0: "a", 1: "b"}):
        assert is_list_like(value), value
        assert not is_mapping_like(value), value


def test_mappings_and_structured_values_are_mapping_like():
    for value in ({}, {"a": 1}, {1: "a", 2: "b"}, {1: "b", 0: "a"}, {"0": "a"},
                  OrderedDict(k=1), SimpleNamespace(a=1), Point(1, 2)):
        assert is_mapping_like(value), value
        assert not is_list_like(value), value


def test_scalars_are_neither():
    for value in (None, True, 0, 1.5, Decimal("1"), "abc", b"abc", {1, 2}, frozenset()):
        assert not is_list_like(value), value
        assert not is_mapping_like(value), value


def test_numeric_detection():
    for value in (0, -3, 2.5, Decimal("1.1"), "3.14", "2e10", " 7 ", "+.5", "-1E-3", "10."):
        assert is_numeric(value), value
    for value in (True, False, None, "", "abc", "nan", "inf", "1,5", "0x1A", "١٢", [1]):
        assert not is_numeric(value), value


def test_stringified_scalars():
    assert is_stringified_bool("TRUE") and is_stringified_bool("false")
    assert not is_stringified_bool("yes") and not is_stringified_bool("true ")
    assert not is_stringified_bool(True)

    assert is_stringified_int("123") and is_stringified_int("-7") and is_stringified_int("+4")
    assert not is_stringified_int("12.5")
    assert not is_stringified_int("12\n")
    assert not is_stringified_int("")
    assert not is_stringified_int(12)

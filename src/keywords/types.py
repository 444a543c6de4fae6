from __future__ import annotations
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, List, Optional
import re

from formats.patterns import INT_RE, NUMERIC_RE


class SchemaType(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"

    @classmethod
    def parse(cls, name: Any) -> Optional["SchemaType"]:
        """Member for `name` (str or SchemaType), None outside the vocabulary."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def names(cls) -> List[str]:
        return [t.value for t in cls]


# Types whose textual representation is accepted in place of the native value.
COERCIBLE_TYPES = (SchemaType.BOOLEAN, SchemaType.NUMBER, SchemaType.INTEGER)

_TEXT = (str, bytes, bytearray)
_NUMBERS = (int, float, Decimal, Fraction)

_BOOL_RE = re.compile(r"(true|false)", re.IGNORECASE)


# ----- structured shapes -----

def _has_sequential_keys(value: Mapping) -> bool:
    """True for a non-empty mapping keyed exactly 0..n-1, in order."""
    if not value:
        return False
    for expected, key in enumerate(value.keys()):
        if type(key) is not int or key != expected:
            return False
    return True


def is_list_like(value: Any) -> bool:
    """
    Ordered sequence, or a mapping that is really an integer-indexed list.
    The empty mapping is never list-like: it is the canonical empty object.
    """
    if isinstance(value, _TEXT):
        return False
    if isinstance(value, Mapping):
        return _has_sequential_keys(value)
    return isinstance(value, Sequence)


def is_mapping_like(value: Any) -> bool:
    """Key-value mapping, or any other structured (attribute-bearing) value."""
    if isinstance(value, Mapping):
        return not _has_sequential_keys(value)
    if value is None or isinstance(value, _TEXT + (bool,) + _NUMBERS):
        return False
    if isinstance(value, (Sequence, Set)):
        return False
    return hasattr(value, "__dict__") or hasattr(value, "__slots__")


# ----- scalars -----

def is_native_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_native_number(value: Any) -> bool:
    return isinstance(value, _NUMBERS) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    if is_native_number(value):
        return True
    return isinstance(value, str) and NUMERIC_RE.fullmatch(value) is not None


def is_stringified_bool(value: Any) -> bool:
    return isinstance(value, str) and _BOOL_RE.fullmatch(value) is not None


def is_stringified_int(value: Any) -> bool:
    return isinstance(value, str) and INT_RE.fullmatch(value) is not None

"""
Built-in format validators.
Shape:
{
  ("<type>", "<format>"): predicate(value) -> bool,
}
Predicates only see values that already passed the type check, so numeric
formats must also accept the stringified forms that check lets through.
"""
from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional
from urllib.parse import urlsplit
import ipaddress
import math
import re

from .patterns import INT_RE, NUMERIC_RE

_BASE64_RE = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_DATE_TIME_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt]"
    r"([0-9]{2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?"
    r"([Zz]|[+-]([0-9]{2}):([0-9]{2}))"
)
_LABEL_RE = re.compile(r"[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_LOCAL_PART_RE = re.compile(r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")

FLOAT32_MAX = 3.4028234663852886e38
INT32_RANGE = (-(2 ** 31), 2 ** 31 - 1)
INT64_RANGE = (-(2 ** 63), 2 ** 63 - 1)


# ----- string formats -----

def is_byte(value: Any) -> bool:
    return isinstance(value, str) and _BASE64_RE.fullmatch(value) is not None


def is_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    m = _DATE_RE.fullmatch(value)
    if not m:
        return False
    try:
        date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return False
    return True


def is_date_time(value: Any) -> bool:
    """RFC 3339 date-time; a leap second (:60) is accepted."""
    if not isinstance(value, str):
        return False
    m = _DATE_TIME_RE.fullmatch(value)
    if not m:
        return False
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    if second > 60:
        return False
    try:
        datetime(year, month, day, hour, minute, min(second, 59))
    except ValueError:
        return False
    if m.group(9) is not None:
        if int(m.group(9)) > 23 or int(m.group(10)) > 59:
            return False
    return True


def is_hostname(value: Any) -> bool:
    if not isinstance(value, str) or not value or len(value) > 253:
        return False
    return all(_LABEL_RE.fullmatch(label) for label in value.split("."))


def is_email(value: Any) -> bool:
    if not isinstance(value, str) or value.count("@") != 1:
        return False
    local, domain = value.split("@")
    if not local or len(local) > 64 or not _LOCAL_PART_RE.fullmatch(local):
        return False
    return "." in domain and is_hostname(domain)


def is_ipv4(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_uri(value: Any) -> bool:
    """Absolute URI: a scheme plus an authority or path, no whitespace."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    return bool(parts.netloc or parts.path)


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None


# ----- numeric formats -----

def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal, Fraction)):
        try:
            return float(value)
        except OverflowError:
            return math.inf
        except ValueError:
            # Decimal("sNaN") has no float form
            return None
    if isinstance(value, str) and NUMERIC_RE.fullmatch(value):
        return float(value)
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INT_RE.fullmatch(value):
        return int(value)
    return None


def is_float(value: Any) -> bool:
    f = _as_float(value)
    return f is not None and math.isfinite(f) and abs(f) <= FLOAT32_MAX


def is_double(value: Any) -> bool:
    f = _as_float(value)
    return f is not None and math.isfinite(f)


def is_int32(value: Any) -> bool:
    i = _as_int(value)
    return i is not None and INT32_RANGE[0] <= i <= INT32_RANGE[1]


def is_int64(value: Any) -> bool:
    i = _as_int(value)
    return i is not None and INT64_RANGE[0] <= i <= INT64_RANGE[1]


BUILTIN_FORMATS = {
    # ---------- string ----------
    ("string", "byte"): is_byte,
    ("string", "date"): is_date,
    ("string", "date-time"): is_date_time,
    ("string", "email"): is_email,
    ("string", "hostname"): is_hostname,
    ("string", "ipv4"): is_ipv4,
    ("string", "ipv6"): is_ipv6,
    ("string", "uri"): is_uri,
    ("string", "uuid"): is_uuid,

    # ---------- number ----------
    ("number", "float"): is_float,
    ("number", "double"): is_double,

    # ---------- integer ----------
    ("integer", "int32"): is_int32,
    ("integer", "int64"): is_int64,
}

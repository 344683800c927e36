"""Strict JSON decoding into dataclasses.

Values are first parsed generically, then each declared field is decoded with
an explicit comparison between the JSON kind found on the wire and the kind
the field's type hint declares.  Nothing is coerced: a string field that
receives an array raises ``TypeMismatch`` instead of being zeroed.

JSON kinds are ``string``, ``number``, ``boolean``, ``array``, ``object`` and
``null``.  Timestamps use the SCIM profile ``YYYY-MM-DDTHH:MM:SSZ`` (UTC,
second precision).
"""

import math
import re
import types
from dataclasses import is_dataclass
from decimal import Decimal
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Union, get_args, get_origin, get_type_hints

from .errors import TypeMismatch
from .fields import bag_field, declared_fields, to_raw, wire_name

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIMESTAMP_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})"
)

_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)


def json_kind(value: Any) -> str:
    """Return the JSON kind of a generically parsed value."""
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {value!r}")


def expected_kind(tp: Any) -> str:
    """Return the JSON kind a type hint accepts."""
    if tp is Any:
        return "any"
    origin = get_origin(tp) or tp
    if origin is list:
        return "array"
    if origin is dict or is_dataclass(tp):
        return "object"
    if tp is bool:
        return "boolean"
    if tp in (int, float):
        return "number"
    if tp in (str, datetime):
        return "string"
    raise TypeError(f"Unsupported field type: {tp!r}")


def parse_timestamp(text: str, path: str = "") -> datetime:
    """Parse a SCIM dateTime into an aware UTC datetime truncated to the second."""
    m = _TIMESTAMP_RE.fullmatch(text)
    if not m:
        raise TypeMismatch(path, "timestamp", "string")
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    zone = m.group(7)
    try:
        if zone == "Z":
            tz = timezone.utc
        else:
            sign = 1 if zone[0] == "+" else -1
            tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
        value = datetime(year, month, day, hour, minute, second, tzinfo=tz)
        return value.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise TypeMismatch(path, "timestamp", "string") from e


def format_timestamp(value: datetime, path: str = "") -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SSZ``. Naive values are taken as UTC.

    Raises:
        TypeMismatch: the UTC equivalent falls outside the representable years.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        try:
            value = value.astimezone(timezone.utc)
        except (OverflowError, ValueError) as e:
            raise TypeMismatch(path, "timestamp", "out-of-range datetime") from e
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z"
    )


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


@lru_cache(maxsize=None)
def field_types(cls) -> Dict[str, Any]:
    """Resolved type hints of dataclass ``cls``."""
    return get_type_hints(cls)


def is_optional(tp: Any) -> bool:
    return get_origin(tp) in _UNION_TYPES and type(None) in get_args(tp)


def decode_value(value: Any, tp: Any, path: str = "") -> Any:
    """Decode one parsed JSON value against type hint ``tp``.

    Raises:
        TypeMismatch: the value's JSON kind does not match ``tp``.
    """
    if tp is Any:
        return value

    origin = get_origin(tp)
    if origin in _UNION_TYPES:
        args = get_args(tp)
        non_null = [a for a in args if a is not type(None)]
        if len(non_null) != 1:
            raise TypeError(f"Only Optional[X] unions are supported, got {tp!r}")
        if value is None and len(non_null) < len(args):
            return None
        return decode_value(value, non_null[0], path)

    expected = expected_kind(tp)
    actual = json_kind(value)
    if actual != expected:
        raise TypeMismatch(path, expected, actual)

    if origin is list or tp is list:
        args = get_args(tp)
        item_tp = args[0] if args else Any
        return [decode_value(item, item_tp, f"{path}[{idx}]") for idx, item in enumerate(value)]
    if origin is dict or tp is dict:
        args = get_args(tp)
        value_tp = args[1] if len(args) == 2 else Any
        return {k: decode_value(v, value_tp, _join(path, k)) for k, v in value.items()}
    if is_dataclass(tp):
        return decode_object(value, tp, path)
    if tp is datetime:
        return parse_timestamp(value, path)
    if tp is int and not isinstance(value, int):
        raise TypeMismatch(path, "integer", "number")
    if tp is float:
        number = float(value)
        if not math.isfinite(number):
            raise TypeMismatch(path, "finite number", "number")
        return number
    return value


def decode_object(data: Dict[str, Any], cls, path: str = ""):
    """Build an instance of dataclass ``cls`` from a parsed JSON object.

    Declared fields are decoded strictly and removed from a working copy of
    ``data``.  Whatever remains goes, as raw JSON text, into the class's
    additional properties field if it has one, and is ignored otherwise.
    Missing declared fields keep their defaults.
    """
    remaining = dict(data)
    hints = field_types(cls)
    values = {}
    for f in declared_fields(cls):
        name = wire_name(f)
        if name not in remaining:
            continue
        values[f.name] = decode_value(remaining.pop(name), hints[f.name], _join(path, name))

    bag = bag_field(cls)
    if bag is not None:
        values[bag.name] = {name: to_raw(value) for name, value in remaining.items()}
    return cls(**values)

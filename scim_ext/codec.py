"""Flat JSON codec for resources with an additional properties bag.

On the wire a resource is one flat JSON object: declared fields and every
extension or custom property sit side by side as top-level members.  In memory
the declared fields live on the dataclass and everything else lives in its
additional properties bag as raw JSON text.

Key behaviors:
- ``decode()`` parses generically, strictly decodes the declared fields, and
  moves the unclaimed remainder into the bag without decoding it
- numbers with a fraction or exponent are parsed as ``Decimal`` and written
  back digit for digit; ``NaN`` and ``Infinity`` are refused both ways
- ``encode()`` emits every declared field (``Optional`` attributes of concrete
  resources holding ``None`` are omitted), then unions the bag in, refusing
  names that collide with a declared field
"""

import logging
from dataclasses import is_dataclass
from datetime import datetime
from typing import Any, Dict, Type, TypeVar, Union

from .errors import FieldNameCollision, MalformedDocument
from .fields import (
    bag_field,
    declared_fields,
    declared_names,
    dump_json,
    from_raw,
    load_json,
    wire_name,
)
from .strict import decode_object, field_types, format_timestamp, is_optional, json_kind

log = logging.getLogger(__name__)

T = TypeVar("T")


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def decode(data: Union[bytes, str], cls: Type[T]) -> T:
    """Decode one JSON object into an instance of dataclass ``cls``.

    Raises:
        MalformedDocument: ``data`` is not JSON, not a JSON object, or uses
            ``NaN``/``Infinity``.
        TypeMismatch: a declared field has the wrong JSON kind.
    """
    try:
        parsed = load_json(data)
    except ValueError as e:
        raise MalformedDocument(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedDocument(f"Expected a JSON object at the top level, got {json_kind(parsed)}")

    obj = decode_object(parsed, cls)
    bag = bag_field(cls)
    if bag is not None:
        log.debug("Decoded %s with %d additional properties", cls.__name__, len(getattr(obj, bag.name)))
    return obj


def decode_file(file_path: str, cls: Type[T]) -> T:
    """Decode a JSON file containing a single resource."""
    with open(file_path, "rb") as f:
        return decode(f.read(), cls)


def encode_value(value: Any, path: str = "") -> Any:
    """Convert a field value into its JSON-serializable form."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value, path)
    if isinstance(value, datetime):
        return format_timestamp(value, path)
    if isinstance(value, (list, tuple)):
        return [encode_value(item, f"{path}[{idx}]") for idx, item in enumerate(value)]
    if isinstance(value, dict):
        return {k: encode_value(v, _join(path, k)) for k, v in value.items()}
    return value


def to_dict(obj: Any, path: str = "") -> Dict[str, Any]:
    """Merge declared fields and additional properties into one flat mapping.

    Raises:
        FieldNameCollision: a bag key equals a declared field's wire name.
        MalformedDocument: a bag value is not valid JSON text.
        TypeMismatch: a timestamp cannot be expressed in UTC.
    """
    cls = type(obj)
    hints = field_types(cls)
    out: Dict[str, Any] = {}
    for f in declared_fields(cls):
        value = getattr(obj, f.name)
        if value is None and is_optional(hints[f.name]):
            continue
        name = wire_name(f)
        out[name] = encode_value(value, _join(path, name))

    bag = bag_field(cls)
    if bag is not None:
        names = declared_names(cls)
        for name, raw in getattr(obj, bag.name).items():
            if name in names:
                raise FieldNameCollision(name)
            out[name] = from_raw(raw, path=_join(path, name))
    return out


def encode(obj: Any) -> bytes:
    """Encode a resource as a single flat JSON object (UTF-8).

    Raises:
        MalformedDocument: a declared float field holds ``nan`` or ``inf``.
    """
    merged = to_dict(obj)
    log.debug("Encoded %s with %d members", type(obj).__name__, len(merged))
    try:
        return dump_json(merged).encode("utf-8")
    except ValueError as e:
        raise MalformedDocument(f"Value cannot be encoded as JSON: {e}") from e

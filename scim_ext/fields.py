"""Dataclass field conventions shared by the decoder and encoder.

A resource is a dataclass.  Each field maps to one top-level JSON member whose
name is the field name unless ``json_field()`` gives another one.  At most one
field, declared with ``additional_properties_field()``, collects every member
that no declared field claims, stored as raw (compact, undecoded) JSON text.
"""

import simplejson
from dataclasses import field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .errors import MalformedDocument

_JSON_NAME = "json"
_BAG = "additional_properties"


def json_field(name: str, **kwargs):
    """Declare a dataclass field serialized under the wire name ``name``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_JSON_NAME] = name
    return field(metadata=metadata, **kwargs)


def additional_properties_field():
    """Declare the catch-all bag of name -> raw JSON text."""
    return field(default_factory=dict, metadata={_BAG: True})


def wire_name(f) -> str:
    return f.metadata.get(_JSON_NAME, f.name)


@lru_cache(maxsize=None)
def _split_fields(cls) -> Tuple[Tuple[Any, ...], Optional[Any]]:
    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")
    declared = []
    bag = None
    for f in fields(cls):
        if f.metadata.get(_BAG):
            if bag is not None:
                raise TypeError(f"{cls.__name__} declares more than one additional properties field")
            bag = f
        else:
            declared.append(f)
    return tuple(declared), bag


def declared_fields(cls) -> Tuple[Any, ...]:
    """Fields that map to a fixed wire name (everything except the bag)."""
    return _split_fields(cls)[0]


def bag_field(cls):
    """The additional properties field of ``cls``, or None."""
    return _split_fields(cls)[1]


@lru_cache(maxsize=None)
def declared_names(cls) -> FrozenSet[str]:
    """Wire names claimed by declared fields of ``cls``."""
    return frozenset(wire_name(f) for f in declared_fields(cls))


def _reject_constant(name: str):
    raise MalformedDocument(f"Non-standard JSON constant {name} is not allowed")


def load_json(data: Any) -> Any:
    """Parse JSON keeping non-integral numbers as exact ``Decimal`` values.

    ``NaN`` and ``Infinity`` raise ``MalformedDocument``.
    """
    return simplejson.loads(data, use_decimal=True, parse_constant=_reject_constant)


def dump_json(value: Any, **kwargs) -> str:
    """Serialize with ``Decimal`` numbers written exactly and non-finite floats refused."""
    kwargs.setdefault("separators", (",", ":"))
    return simplejson.dumps(value, use_decimal=True, allow_nan=False, **kwargs)


def to_raw(value: Any, path: str = "") -> str:
    """Serialize a parsed JSON value to compact raw JSON text."""
    try:
        return dump_json(value)
    except ValueError as e:
        raise MalformedDocument(f"Value cannot be encoded as JSON: {e}", path=path) from e


def from_raw(raw: str, path: str = "") -> Any:
    """Parse raw JSON text stored in a bag."""
    try:
        return load_json(raw)
    except MalformedDocument as e:
        raise MalformedDocument(e.message, path=path) from e
    except (TypeError, ValueError) as e:
        raise MalformedDocument(f"Invalid raw JSON value: {e}", path=path) from e


def bag_of(obj) -> Dict[str, str]:
    f = bag_field(type(obj))
    if f is None:
        raise TypeError(f"{type(obj).__name__} has no additional properties field")
    return getattr(obj, f.name)

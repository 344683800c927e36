"""Namespace-keyed access to SCIM extensions stored in a resource's bag.

An extension schema occupies its own top-level member named by its URN, e.g.::

    {
      "id": "2819c223",
      "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User": {
        "employeeNumber": "701984"
      }
    }

After decoding, that member sits undecoded in ``additional_properties``.  The
registry encodes and decodes it on demand against whatever extension type the
caller supplies, so no global table of extension types is needed.
"""

import logging
from dataclasses import fields, is_dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

from .codec import encode_value
from .errors import ExtensionAlreadyExists, ExtensionNotFound, FieldNameCollision
from .fields import bag_of, declared_names, from_raw, to_raw
from .schemas import URNPolicy, looks_like_urn
from .strict import decode_value

log = logging.getLogger(__name__)


@runtime_checkable
class Extension(Protocol):
    """Anything that can name the schema it belongs to."""

    def urn(self) -> str:
        ...


def _namespace(ext: Any) -> str:
    if not isinstance(ext, Extension):
        raise TypeError(f"{type(ext).__name__} does not implement urn()")
    return ext.urn()


class ExtensionRegistry:
    """Mixin for dataclasses that declare an additional properties field.

    ``urn_policy`` decides which bag keys ``get_extension_urns()`` reports;
    override it in a subclass with ``staticmethod(prefix_policy(...))``.
    """

    urn_policy = staticmethod(looks_like_urn)

    def add_extension(self, ext: Extension) -> None:
        """Store ``ext`` under its URN.  Never overwrites an existing entry.

        Raises:
            ExtensionAlreadyExists: the URN is already present.
            FieldNameCollision: the URN equals a declared field name.
        """
        ns = _namespace(ext)
        bag = bag_of(self)
        if ns in bag:
            raise ExtensionAlreadyExists(ns)
        if ns in declared_names(type(self)):
            raise FieldNameCollision(ns)
        bag[ns] = to_raw(encode_value(ext, ns), path=ns)
        log.debug("Added extension %s to %s", ns, type(self).__name__)

    def get_extension(self, ext: Extension) -> Extension:
        """Decode the stored payload for ``ext.urn()`` into ``ext`` and return it.

        Every field of ``ext`` is replaced; fields missing from the payload
        fall back to their defaults.

        Raises:
            ExtensionNotFound: the URN is absent.
            TypeMismatch: the stored payload does not fit ``ext``'s fields.
        """
        ns = _namespace(ext)
        bag = bag_of(self)
        if ns not in bag:
            raise ExtensionNotFound(ns)
        if not is_dataclass(ext):
            raise TypeError(f"{type(ext).__name__} must be a dataclass to be decoded")

        decoded = decode_value(from_raw(bag[ns], path=ns), type(ext), ns)
        for f in fields(decoded):
            setattr(ext, f.name, getattr(decoded, f.name))
        return ext

    def has_extension(self, ext: Extension) -> bool:
        return _namespace(ext) in bag_of(self)

    def update_extension(self, ext: Extension) -> None:
        """Replace the stored payload for ``ext.urn()``.  Never creates one.

        Raises:
            ExtensionNotFound: the URN is absent.
        """
        ns = _namespace(ext)
        bag = bag_of(self)
        if ns not in bag:
            raise ExtensionNotFound(ns)
        bag[ns] = to_raw(encode_value(ext, ns), path=ns)
        log.debug("Updated extension %s on %s", ns, type(self).__name__)

    def remove_extension(self, ext: Extension) -> None:
        if bag_of(self).pop(_namespace(ext), None) is not None:
            log.debug("Removed extension %s from %s", ext.urn(), type(self).__name__)

    def get_extension_urns(self, policy: Optional[URNPolicy] = None) -> List[str]:
        """Bag keys that look like extension namespaces, in no particular order."""
        policy = policy or self.urn_policy
        return [key for key in bag_of(self) if policy(key)]

    def get_property(self, name: str, default: Any = None) -> Any:
        """Parsed value of an additional property, or ``default`` if absent."""
        raw = bag_of(self).get(name)
        if raw is None:
            return default
        return from_raw(raw, path=name)

    def set_property(self, name: str, value: Any) -> None:
        """Store ``value`` as an additional property, replacing any previous value.

        Raises:
            FieldNameCollision: ``name`` equals a declared field name.
        """
        if name in declared_names(type(self)):
            raise FieldNameCollision(name)
        bag_of(self)[name] = to_raw(encode_value(value, name), path=name)

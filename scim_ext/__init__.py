"""scim-ext: SCIM 2.0 resources with namespace-keyed extensions.

Decodes flat SCIM JSON documents into dataclasses, keeps every unclaimed
top-level member (extension schemas and custom properties) as raw JSON, lets
callers add, read, update and remove extensions by URN, and encodes the result
back into one flat JSON object.
"""

__version__ = "0.1.0"

from .codec import decode, decode_file, encode, to_dict
from .errors import (
    ExtensionAlreadyExists,
    ExtensionNotFound,
    FieldNameCollision,
    MalformedDocument,
    SCIMError,
    TypeMismatch,
)
from .extension import Extension, ExtensionRegistry
from .fields import additional_properties_field, json_field
from .resource import CommonAttributes, ResourceMeta

__all__ = [
    "decode",
    "decode_file",
    "encode",
    "to_dict",
    "SCIMError",
    "TypeMismatch",
    "MalformedDocument",
    "FieldNameCollision",
    "ExtensionNotFound",
    "ExtensionAlreadyExists",
    "Extension",
    "ExtensionRegistry",
    "additional_properties_field",
    "json_field",
    "CommonAttributes",
    "ResourceMeta",
]

"""Common attributes shared by every SCIM resource (RFC 7643 section 3.1)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

from .extension import ExtensionRegistry
from .fields import additional_properties_field, json_field
from .strict import ZERO_TIME


@dataclass
class ResourceMeta:
    """The ``meta`` block.  Always emitted, zero values included."""

    resource_type: str = json_field("resourceType", default="")
    created: datetime = ZERO_TIME
    last_modified: datetime = json_field("lastModified", default=ZERO_TIME)
    version: str = ""
    location: str = ""


@dataclass
class CommonAttributes(ExtensionRegistry):
    """Base of every resource: ``id``, ``externalId``, ``meta`` and the bag.

    ``additional_properties`` maps each unclaimed top-level member (extension
    URNs and custom properties alike) to its raw JSON text.
    """

    id: str = ""
    external_id: str = json_field("externalId", default="")
    meta: ResourceMeta = field(default_factory=ResourceMeta)
    additional_properties: Dict[str, str] = additional_properties_field()

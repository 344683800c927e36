"""Concrete SCIM resources and the Enterprise User extension.

Attribute sets follow RFC 7643 sections 4.1 (User), 4.2 (Group) and 4.3
(Enterprise User).  ``Organization`` is a custom resource type in the style
used by campus directories (``urn:com:example:2.0:Organization``).

Everything here is plain data: the decoding, encoding and extension handling
all come from ``CommonAttributes``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .fields import json_field
from .resource import CommonAttributes
from .schemas import CORE_GROUP_URN, CORE_USER_URN, ENTERPRISE_USER_URN

ORGANIZATION_URN = "urn:com:example:2.0:Organization"


@dataclass
class MultiValuedAttribute:
    """Sub-attributes shared by emails, phoneNumbers, groups and friends."""

    value: Optional[str] = None
    display: Optional[str] = None
    type: Optional[str] = None
    primary: Optional[bool] = None


@dataclass
class Name:
    formatted: Optional[str] = None
    family_name: Optional[str] = json_field("familyName", default=None)
    given_name: Optional[str] = json_field("givenName", default=None)
    middle_name: Optional[str] = json_field("middleName", default=None)
    honorific_prefix: Optional[str] = json_field("honorificPrefix", default=None)
    honorific_suffix: Optional[str] = json_field("honorificSuffix", default=None)


@dataclass
class User(CommonAttributes):
    schemas: List[str] = field(default_factory=lambda: [CORE_USER_URN])
    user_name: str = json_field("userName", default="")
    name: Optional[Name] = None
    display_name: Optional[str] = json_field("displayName", default=None)
    nick_name: Optional[str] = json_field("nickName", default=None)
    profile_url: Optional[str] = json_field("profileUrl", default=None)
    title: Optional[str] = None
    user_type: Optional[str] = json_field("userType", default=None)
    preferred_language: Optional[str] = json_field("preferredLanguage", default=None)
    locale: Optional[str] = None
    timezone: Optional[str] = None
    active: Optional[bool] = None
    emails: Optional[List[MultiValuedAttribute]] = None
    phone_numbers: Optional[List[MultiValuedAttribute]] = json_field("phoneNumbers", default=None)
    groups: Optional[List[MultiValuedAttribute]] = None


@dataclass
class GroupMember:
    value: Optional[str] = None
    ref: Optional[str] = json_field("$ref", default=None)
    display: Optional[str] = None
    type: Optional[str] = None


@dataclass
class Group(CommonAttributes):
    schemas: List[str] = field(default_factory=lambda: [CORE_GROUP_URN])
    display_name: str = json_field("displayName", default="")
    members: Optional[List[GroupMember]] = None


@dataclass
class Organization(CommonAttributes):
    """A node in an organizational hierarchy; ``parent`` and ``children`` are relative references."""

    schemas: List[str] = field(default_factory=lambda: [ORGANIZATION_URN])
    name: str = ""
    type: Optional[str] = None
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)


@dataclass
class Manager:
    value: Optional[str] = None
    ref: Optional[str] = json_field("$ref", default=None)
    display_name: Optional[str] = json_field("displayName", default=None)


@dataclass
class EnterpriseUser:
    """Enterprise User extension, carried under its URN on a ``User``."""

    employee_number: Optional[str] = json_field("employeeNumber", default=None)
    cost_center: Optional[str] = json_field("costCenter", default=None)
    organization: Optional[str] = None
    division: Optional[str] = None
    department: Optional[str] = None
    manager: Optional[Manager] = None

    def urn(self) -> str:
        return ENTERPRISE_USER_URN


# Lookup used by the CLI --type option
RESOURCE_TYPES = {
    "resource": CommonAttributes,
    "user": User,
    "group": Group,
    "organization": Organization,
}

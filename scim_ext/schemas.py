"""SCIM 2.0 schema URNs (RFC 7643) and extension namespace detection."""

import re
from typing import Callable

# Core schemas (RFC 7643)
CORE_USER_URN = "urn:ietf:params:scim:schemas:core:2.0:User"
CORE_GROUP_URN = "urn:ietf:params:scim:schemas:core:2.0:Group"

# Enterprise User extension (RFC 7643 section 4.3)
ENTERPRISE_USER_URN = "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User"

# Prefix shared by the IETF-registered extension schemas
EXTENSION_URN_PREFIX = "urn:ietf:params:scim:schemas:extension:"

# A policy decides which additional property names are extension namespaces.
URNPolicy = Callable[[str], bool]

# URI scheme followed by a colon (RFC 3986 section 3.1), e.g. "urn:"
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def looks_like_urn(key: str) -> bool:
    """Default policy: the name starts with a URI scheme such as ``urn:``.

    This is a convention, not a rule of the protocol; plain property names
    may legally contain colons, so callers can swap in a stricter policy.
    """
    return bool(_SCHEME_RE.match(key))


def prefix_policy(prefix: str) -> URNPolicy:
    """Build a policy that accepts names starting with ``prefix`` (case-insensitive)."""
    lowered = prefix.lower()

    def policy(key: str) -> bool:
        return key.lower().startswith(lowered)

    return policy

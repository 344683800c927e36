"""Shared documents and resources for the scim-ext tests."""

import pytest
from scim_ext.resource import CommonAttributes

RESOURCE_JSON = """{
    "id": "2819c223-7f76-453a-919d-413861904646",
    "externalId": "43496746-7739-460b-bf99-3421f2970687",
    "meta": {
        "resourceType": "User",
        "created": "2010-01-23T04:56:22Z",
        "lastModified": "2011-05-13T04:42:34Z",
        "version": "W/3694e05e9dff590",
        "location": "https://example.com/v2/Users/2819c223-7f76-453a-919d-413861904646"
    }
}"""

RESOURCE_WITH_ADDITIONAL_PROPERTIES_JSON = """{
    "id": "2819c223-7f76-453a-919d-413861904646",
    "externalId": "43496746-7739-460b-bf99-3421f2970687",
    "meta": {
        "resourceType": "User",
        "created": "2010-01-23T04:56:22Z",
        "lastModified": "2011-05-13T04:42:34Z",
        "version": "W/3694e05e9dff590",
        "location": "https://example.com/v2/Users/2819c223-7f76-453a-919d-413861904646"
    },
    "urn:fake.extension": {
        "name": "Fake Extension"
    },
    "customProp1": "customProp1",
    "customProp2": {"nested": [1, 2, 3]}
}"""


@pytest.fixture
def resource():
    """A resource holding one extension and two plain custom properties."""
    ca = CommonAttributes(id="2819c223-7f76-453a-919d-413861904646")
    ca.additional_properties["urn:fake.extension"] = '{"name": "Fake Extension"}'
    ca.additional_properties["additionalPropertiesOne"] = '"additionalPropertiesOne"'
    ca.additional_properties["additionalPropertiesTwo"] = '"additionalPropertiesTwo"'
    return ca


@pytest.fixture
def resource_json():
    return RESOURCE_JSON


@pytest.fixture
def extended_resource_json():
    """RESOURCE_JSON plus one extension and two custom properties."""
    return RESOURCE_WITH_ADDITIONAL_PROPERTIES_JSON

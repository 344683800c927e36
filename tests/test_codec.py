"""Tests for flat decoding/encoding with an additional properties bag.

Covers the split of unclaimed members into the bag on decode, the flat merge
on encode (meta always present, bag entries as siblings), collisions between
bag keys and declared fields, malformed input, and round-trip stability.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from scim_ext.codec import decode, decode_file, encode, to_dict
from scim_ext.errors import FieldNameCollision, MalformedDocument
from scim_ext.resource import CommonAttributes, ResourceMeta
from scim_ext.resources import User

ZERO_META = {
    "resourceType": "",
    "created": "0001-01-01T00:00:00Z",
    "lastModified": "0001-01-01T00:00:00Z",
    "version": "",
    "location": "",
}


@dataclass
class Reading:
    value: float = 0.0


class TestDecode:

    def test_resource_unmarshaling(self, resource_json):
        ca = decode(resource_json.encode("utf-8"), CommonAttributes)
        assert ca.id == "2819c223-7f76-453a-919d-413861904646"
        assert ca.external_id == "43496746-7739-460b-bf99-3421f2970687"
        assert ca.meta.resource_type == "User"
        assert ca.meta.created == datetime(2010, 1, 23, 4, 56, 22, tzinfo=timezone.utc)
        assert ca.meta.last_modified == datetime(2011, 5, 13, 4, 42, 34, tzinfo=timezone.utc)
        assert ca.meta.version == "W/3694e05e9dff590"
        assert ca.meta.location == "https://example.com/v2/Users/2819c223-7f76-453a-919d-413861904646"
        assert ca.additional_properties == {}

    def test_unclaimed_members_go_to_bag(self, extended_resource_json):
        ca = decode(extended_resource_json, CommonAttributes)
        assert set(ca.additional_properties) == {"urn:fake.extension", "customProp1", "customProp2"}
        assert ca.additional_properties["urn:fake.extension"] == '{"name":"Fake Extension"}'
        assert ca.additional_properties["customProp1"] == '"customProp1"'
        assert ca.additional_properties["customProp2"] == '{"nested":[1,2,3]}'

    def test_declared_names_never_in_bag(self, extended_resource_json):
        ca = decode(extended_resource_json, CommonAttributes)
        for name in ("id", "externalId", "meta"):
            assert name not in ca.additional_properties

    def test_bag_values_are_not_type_checked(self):
        ca = decode('{"id": "abc", "urn:odd": ["not", "an", "object"], "n": null}', CommonAttributes)
        assert ca.additional_properties["urn:odd"] == '["not","an","object"]'
        assert ca.additional_properties["n"] == "null"

    @pytest.mark.parametrize("doc", [
        "[1, 2, 3]",
        '"just a string"',
        "42",
        "null",
    ])
    def test_top_level_must_be_object(self, doc):
        with pytest.raises(MalformedDocument) as exc:
            decode(doc, CommonAttributes)
        assert "JSON object" in str(exc.value)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, constant):
        with pytest.raises(MalformedDocument) as exc:
            decode('{"id": "abc", "score": ' + constant + '}', CommonAttributes)
        assert constant.lstrip("-") in str(exc.value)

    def test_numbers_kept_exactly_in_bag(self):
        doc = '{"id": "abc", "pi": 3.14159265358979323846264338327950288, "huge": 1e400, "big": 12345678901234567890123}'
        ca = decode(doc, CommonAttributes)
        assert ca.additional_properties["pi"] == "3.14159265358979323846264338327950288"
        assert ca.additional_properties["huge"] == "1E+400"
        assert ca.additional_properties["big"] == "12345678901234567890123"
        assert ca.get_property("pi") == Decimal("3.14159265358979323846264338327950288")

    def test_invalid_json(self):
        with pytest.raises(MalformedDocument) as exc:
            decode(b'{"id": ', CommonAttributes)
        assert "Invalid JSON" in str(exc.value)

    def test_decode_file(self, tmp_path, extended_resource_json):
        path = tmp_path / "user.json"
        path.write_text(extended_resource_json)
        ca = decode_file(str(path), CommonAttributes)
        assert ca.id == "2819c223-7f76-453a-919d-413861904646"
        assert len(ca.additional_properties) == 3


class TestEncode:

    def test_flat_object_with_meta(self, resource):
        obj = json.loads(encode(resource))
        for name in ("id", "meta", "urn:fake.extension", "additionalPropertiesOne", "additionalPropertiesTwo"):
            assert name in obj
        assert obj["urn:fake.extension"] == {"name": "Fake Extension"}
        assert obj["additionalPropertiesOne"] == "additionalPropertiesOne"
        assert obj["additionalPropertiesTwo"] == "additionalPropertiesTwo"
        assert obj["meta"] == ZERO_META

    def test_bag_is_not_nested(self, resource):
        obj = json.loads(encode(resource))
        assert "additional_properties" not in obj
        assert "additionalProperties" not in obj

    def test_common_fields_always_emitted(self):
        obj = to_dict(CommonAttributes(id="x"))
        assert obj == {"id": "x", "externalId": "", "meta": ZERO_META}

    def test_unset_optional_is_omitted(self):
        obj = to_dict(User(id="x", user_name="bjensen"))
        assert "displayName" not in obj
        assert obj["externalId"] == ""

    def test_external_id_emitted_at_zero_value(self, resource):
        assert to_dict(resource)["externalId"] == ""
        resource.external_id = "ext-1"
        assert to_dict(resource)["externalId"] == "ext-1"

    def test_returns_utf8_bytes(self):
        ca = CommonAttributes(id="abc")
        ca.additional_properties["nickName"] = '"Zo\\u00eb"'
        data = encode(ca)
        assert isinstance(data, bytes)
        assert json.loads(data.decode("utf-8"))["nickName"] == "Zoë"

    @pytest.mark.parametrize("name", ["id", "externalId", "meta"])
    def test_collision_with_common_field(self, resource, name):
        resource.additional_properties[name] = '"duplicate"'
        with pytest.raises(FieldNameCollision) as exc:
            encode(resource)
        assert exc.value.name == name

    def test_collision_with_subclass_field(self):
        user = User(id="abc", user_name="bjensen")
        user.additional_properties["userName"] = '"someone-else"'
        with pytest.raises(FieldNameCollision):
            encode(user)

    def test_invalid_raw_value(self, resource):
        resource.additional_properties["broken"] = '{"unterminated": '
        with pytest.raises(MalformedDocument) as exc:
            encode(resource)
        assert exc.value.path == "broken"

    def test_raw_nan_rejected(self, resource):
        resource.additional_properties["score"] = "NaN"
        with pytest.raises(MalformedDocument) as exc:
            encode(resource)
        assert exc.value.path == "score"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_rejected(self, value):
        with pytest.raises(MalformedDocument):
            encode(Reading(value=value))

    def test_meta_timestamps(self):
        ca = CommonAttributes(id="abc", meta=ResourceMeta(
            resource_type="User",
            created=datetime(2010, 1, 23, 4, 56, 22, tzinfo=timezone.utc),
        ))
        meta = to_dict(ca)["meta"]
        assert meta["created"] == "2010-01-23T04:56:22Z"
        assert meta["lastModified"] == "0001-01-01T00:00:00Z"


class TestRoundTrip:

    def test_round_trip_is_stable(self, extended_resource_json):
        first = decode(extended_resource_json, CommonAttributes)
        second = decode(encode(first), CommonAttributes)
        assert second == first

    def test_round_trip_preserves_custom_members(self, extended_resource_json):
        original = json.loads(extended_resource_json)
        encoded = json.loads(encode(decode(extended_resource_json, CommonAttributes)))
        assert encoded == original

    @pytest.mark.parametrize("text,expected", [
        ("3.14159265358979323846264338327950288", b"3.14159265358979323846264338327950288"),
        ("0.1", b"0.1"),
        ("-2.50", b"-2.50"),
        ("12345678901234567890123", b"12345678901234567890123"),
        ("1e400", b"1E+400"),
        ("-1e-400", b"-1E-400"),
    ])
    def test_numbers_survive_round_trip(self, text, expected):
        doc = '{"id": "abc", "urn:fake.extension": {"weight": ' + text + '}, "score": ' + text + '}'
        data = encode(decode(doc, CommonAttributes))
        assert b'"score":' + expected in data
        assert b'{"weight":' + expected + b"}" in data
        assert b"Infinity" not in data
        assert decode(data, CommonAttributes) == decode(doc, CommonAttributes)

    def test_meta_added_when_absent(self):
        doc = '{"id": "abc", "urn:fake.extension": {"name": "x"}, "customProp1": 1, "customProp2": [true]}'
        obj = json.loads(encode(decode(doc, CommonAttributes)))
        assert set(obj) == {"id", "externalId", "meta", "urn:fake.extension", "customProp1", "customProp2"}
        assert obj["meta"] == ZERO_META

    def test_hand_written_raw_values_normalize(self, resource):
        second = decode(encode(resource), CommonAttributes)
        assert second.additional_properties["urn:fake.extension"] == '{"name":"Fake Extension"}'
        assert decode(encode(second), CommonAttributes) == second

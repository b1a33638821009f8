#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from datetime import datetime, timedelta, timezone

import pytest

from cloudcode.core.data.codec import decode, encode
from cloudcode.core.data.objects import CloudObject, GeoPoint
from cloudcode.core.utils.exceptions import SerializationError


def test_primitives_pass_through():
    for value in ("text", 1, 2.5, True, None):
        assert encode(value) == value
        assert decode(value) == value


def test_dates_are_encoded_as_utc_with_millisecond_precision():
    value = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone(timedelta(hours=2)))

    assert encode(value) == {"__type": "Date", "iso": "2024-01-02T01:04:05.678Z"}
    assert decode({"__type": "Date", "iso": "2024-01-02T01:04:05.678Z"}) == datetime(
        2024, 1, 2, 1, 4, 5, 678000, tzinfo=timezone.utc
    )


def test_naive_dates_are_treated_as_utc():
    assert encode(datetime(2024, 1, 1)) == {
        "__type": "Date",
        "iso": "2024-01-01T00:00:00.000Z",
    }


def test_saved_objects_encode_as_pointers():
    item = CloudObject("Item", object_id="i1", attributes={"name": "lamp"})

    assert encode(item, disallow_unsaved=True) == {
        "__type": "Pointer",
        "className": "Item",
        "objectId": "i1",
    }


def test_unsaved_objects_are_rejected_when_disallowed():
    with pytest.raises(SerializationError) as exc_info:
        encode({"items": [CloudObject("Item")]}, disallow_unsaved=True)

    assert exc_info.value.operation == "encode"
    assert exc_info.value.data_type == "Item"


def test_unsaved_objects_are_embedded_when_allowed():
    item = CloudObject("Item", attributes={"bought": datetime(2024, 1, 1, tzinfo=timezone.utc)})

    assert encode(item) == {
        "__type": "Object",
        "className": "Item",
        "bought": {"__type": "Date", "iso": "2024-01-01T00:00:00.000Z"},
    }


def test_encode_does_not_mutate_input():
    payload = {"items": ({"a": 1},), "when": datetime(2024, 1, 1)}
    snapshot = {"items": ({"a": 1},), "when": datetime(2024, 1, 1)}

    first = encode(payload, True)
    second = encode(payload, True)

    assert payload == snapshot
    assert first == second
    assert first["items"] == [{"a": 1}]


def test_unsupported_values_raise_serialization_error():
    with pytest.raises(SerializationError):
        encode({"value": object()})
    with pytest.raises(SerializationError):
        encode({1: "non-string key"})


def test_decode_object_marker_builds_cloud_object():
    decoded = decode(
        {
            "__type": "Object",
            "className": "_JobStatus",
            "objectId": "s1",
            "createdAt": "2024-03-01T10:00:00.000Z",
            "status": "succeeded",
            "params": {"where": {"__type": "GeoPoint", "latitude": 1.0, "longitude": 2.0}},
        }
    )

    assert isinstance(decoded, CloudObject)
    assert decoded.object_id == "s1"
    assert decoded.created_at == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)
    assert decoded["status"] == "succeeded"
    assert decoded["params"]["where"] == GeoPoint(1.0, 2.0)


def test_decode_leaves_unknown_markers_alone():
    value = {"__type": "Relation", "className": "Item"}

    assert decode(value) == value


def test_decode_malformed_marker_raises():
    with pytest.raises(SerializationError):
        decode({"__type": "Bytes", "base64": "%%%"})
    with pytest.raises(SerializationError):
        decode({"__type": "Pointer", "className": "Item"})


def test_geopoint_validates_range():
    with pytest.raises(ValueError):
        GeoPoint(91.0, 0.0)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Value codec between application objects and the JSON-safe wire form.

Non-JSON-native values are wrapped in ``{"__type": ...}`` markers. ``encode``
is pure: it never mutates its input and returns the same output for the same
input.
"""

import base64
import binascii
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from ..utils.exceptions import SerializationError
from .objects import CloudObject, GeoPoint

_PRIMITIVES = (str, int, float, bool, type(None))


def _encode_date(value: datetime) -> Dict[str, Any]:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    iso = utc.strftime("%Y-%m-%dT%H:%M:%S.") + "{0:03d}Z".format(utc.microsecond // 1000)
    return {"__type": "Date", "iso": iso}


def _decode_date(iso: str) -> datetime:
    return datetime.fromisoformat(iso.replace("Z", "+00:00"))


def encode(value: Any, disallow_unsaved: bool = False) -> Any:
    """
    Encode ``value`` into its wire form.

    With ``disallow_unsaved`` set, an unsaved ``CloudObject`` anywhere in the
    value raises ``SerializationError`` instead of being embedded in full.
    """
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, datetime):
        return _encode_date(value)
    if isinstance(value, (bytes, bytearray)):
        return {"__type": "Bytes", "base64": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, GeoPoint):
        return {
            "__type": "GeoPoint",
            "latitude": value.latitude,
            "longitude": value.longitude,
        }
    if isinstance(value, CloudObject):
        if value.object_id is not None:
            return value.to_pointer()
        if disallow_unsaved:
            raise SerializationError(
                operation="encode",
                message="Cannot create a pointer to an unsaved object",
                data_type=value.class_name,
            )
        full: Dict[str, Any] = {"__type": "Object", "className": value.class_name}
        for key, item in value.attributes.items():
            full[key] = encode(item, disallow_unsaved)
        return full
    if isinstance(value, (list, tuple)):
        return [encode(item, disallow_unsaved) for item in value]
    if isinstance(value, Mapping):
        encoded: Dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    operation="encode",
                    message=f"Mapping keys must be strings, got {type(key).__name__}",
                    data_type=type(value).__name__,
                )
            encoded[key] = encode(item, disallow_unsaved)
        return encoded

    raise SerializationError(
        operation="encode",
        message=f"Object of type {type(value).__name__} cannot be encoded",
        data_type=type(value).__name__,
    )


def _decode_marker(value: Dict[str, Any]) -> Any:
    type_name = value.get("__type")
    try:
        if type_name == "Date":
            return _decode_date(value["iso"])
        if type_name == "Bytes":
            return base64.b64decode(value["base64"], validate=True)
        if type_name == "GeoPoint":
            return GeoPoint(float(value["latitude"]), float(value["longitude"]))
        if type_name == "Pointer":
            return CloudObject(class_name=value["className"], object_id=value["objectId"])
        if type_name == "Object":
            return CloudObject.from_server(value["className"], value, decoder=decode)
    except (KeyError, TypeError, ValueError, binascii.Error) as exc:
        raise SerializationError(
            operation="decode",
            message=f"Malformed {type_name} value: {exc}",
            data_type=str(type_name),
            cause=exc,
        ) from exc
    return value


def decode(value: Any) -> Any:
    """
    Decode a wire value back into application objects.

    Primitives and unknown ``__type`` markers pass through unchanged.
    """
    if isinstance(value, list):
        return [decode(item) for item in value]
    if isinstance(value, dict):
        if "__type" in value:
            decoded = _decode_marker(value)
            if decoded is not value:
                return decoded
        return {key: decode(item) for key, item in value.items()}
    return value

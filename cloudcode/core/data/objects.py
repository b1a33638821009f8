#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Domain values exchanged with the platform.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

_RESERVED_FIELDS = ("objectId", "createdAt", "updatedAt", "className", "__type")


@dataclass(frozen=True)
class GeoPoint:
    """
    Latitude/longitude pair.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(
                f"longitude must be within [-180, 180], got {self.longitude}"
            )


@dataclass
class CloudObject:
    """
    A record stored in a platform collection.

    Objects without ``object_id`` have never been saved and cannot be sent as
    references.
    """

    class_name: str
    object_id: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.class_name, str) or not self.class_name:
            raise ValueError("class_name must be a non-empty string")

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def set(self, key: str, value: Any) -> "CloudObject":
        if key in _RESERVED_FIELDS:
            raise ValueError(f"'{key}' is a reserved field")
        self.attributes[key] = value
        return self

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    @property
    def is_saved(self) -> bool:
        return self.object_id is not None

    def to_pointer(self) -> Dict[str, Any]:
        if self.object_id is None:
            raise ValueError("Cannot create a pointer to an unsaved object")
        return {
            "__type": "Pointer",
            "className": self.class_name,
            "objectId": self.object_id,
        }

    @classmethod
    def from_server(
        cls, class_name: str, data: Mapping[str, Any], decoder: Any = None
    ) -> "CloudObject":
        """
        Build an object from a server record.

        ``decoder`` is applied to every attribute value and to the timestamps;
        the codec passes itself in here.
        """
        decode = decoder if decoder is not None else (lambda value: value)
        attributes = {
            key: decode(value)
            for key, value in data.items()
            if key not in _RESERVED_FIELDS
        }
        return cls(
            class_name=class_name,
            object_id=data.get("objectId"),
            attributes=attributes,
            created_at=_parse_timestamp(decode(data.get("createdAt"))),
            updated_at=_parse_timestamp(decode(data.get("updatedAt"))),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported timestamp value: {value!r}")

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Wire codec, domain values and request/response records.
"""

from .codec import decode, encode
from .models import (
    MASTER_KEY_OPTIONS,
    CloudResponse,
    RequestOptions,
    build_request_options,
    master_key_options,
)
from .objects import CloudObject, GeoPoint

__all__ = [
    "encode",
    "decode",
    "CloudObject",
    "GeoPoint",
    "CloudResponse",
    "RequestOptions",
    "MASTER_KEY_OPTIONS",
    "build_request_options",
    "master_key_options",
]

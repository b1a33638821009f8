#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Request/response records for cloud function and job calls.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..utils.exceptions import CloudError, ErrorCode
from .codec import decode

RequestOptions = Dict[str, Any]

# Job operations always run with the master key; callers cannot override it.
MASTER_KEY_OPTIONS: Mapping[str, Any] = MappingProxyType({"use_master_key": True})


def build_request_options(options: Optional[Mapping[str, Any]] = None) -> RequestOptions:
    """
    Keep only the options the server understands.

    ``use_master_key`` and ``session_token`` are forwarded when truthy;
    ``context`` only when it is a mapping. Anything else is dropped, and unset
    options are left out rather than sent as empty values. Falsy or
    non-mapping ``options`` count as no options.
    """
    if not options or not isinstance(options, Mapping):
        return {}

    request_options: RequestOptions = {}
    if options.get("use_master_key"):
        request_options["use_master_key"] = options["use_master_key"]
    if options.get("session_token"):
        request_options["session_token"] = options["session_token"]
    context = options.get("context")
    if isinstance(context, Mapping):
        request_options["context"] = context
    return request_options


def master_key_options() -> RequestOptions:
    return dict(MASTER_KEY_OPTIONS)


@dataclass(frozen=True)
class CloudResponse:
    """
    Parsed reply of a cloud function call.
    """

    has_result: bool
    result: Any = None

    @classmethod
    def parse(cls, raw: Any) -> "CloudResponse":
        """
        Validate and decode a raw function reply.

        A non-empty mapping without ``result`` is rejected. An empty mapping,
        or any non-mapping reply, is accepted as a reply without a result.
        """
        if isinstance(raw, Mapping) and len(raw) > 0 and "result" not in raw:
            raise CloudError(
                ErrorCode.INVALID_JSON,
                "The server returned an invalid response.",
            )
        decoded = decode(raw)
        if isinstance(decoded, Mapping) and "result" in decoded:
            return cls(has_result=True, result=decoded["result"])
        return cls(has_result=False)

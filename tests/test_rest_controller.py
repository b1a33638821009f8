#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the httpx-backed REST controller.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone

import httpx
import pytest

from cloudcode.core.config import CloudCodeConfig
from cloudcode.core.rest import RESTController
from cloudcode.core.utils.exceptions import CloudError, ErrorCode, SerializationError


def _config(**overrides):
    values = {
        "server_url": "https://api.example.test/parse/",
        "application_id": "app-id",
        "master_key": "master",
    }
    values.update(overrides)
    return CloudCodeConfig(**values)


def _controller(handler, **config_overrides):
    seen = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    controller = RESTController(
        _config(**config_overrides), transport=httpx.MockTransport(record)
    )
    return controller, seen


def test_post_sends_json_body_and_headers():
    controller, seen = _controller(lambda request: httpx.Response(200, json={"result": 3}))

    response = asyncio.run(
        controller.request(
            "POST",
            "functions/sum",
            {"values": [1, 2]},
            {"session_token": "r:token", "context": {"trace": "t-1"}},
        )
    )

    assert response == {"result": 3}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.test/parse/functions/sum"
    assert json.loads(request.content) == {"values": [1, 2]}
    assert request.headers["X-Parse-Application-Id"] == "app-id"
    assert request.headers["X-Parse-Session-Token"] == "r:token"
    assert json.loads(request.headers["X-Parse-Cloud-Context"]) == {"trace": "t-1"}
    assert "X-Parse-Master-Key" not in request.headers


def test_master_key_header_only_when_requested():
    controller, seen = _controller(lambda request: httpx.Response(200, json={}))

    asyncio.run(controller.request("GET", "cloud_code/jobs/data", None, {"use_master_key": True}))

    assert seen[0].method == "GET"
    assert seen[0].headers["X-Parse-Master-Key"] == "master"


def test_master_key_requested_without_configuration_fails_before_sending():
    controller, seen = _controller(
        lambda request: httpx.Response(200, json={}), master_key=None
    )

    with pytest.raises(CloudError, match="Cannot use the Master Key"):
        asyncio.run(controller.request("POST", "jobs/reindex", {}, {"use_master_key": True}))

    assert seen == []


def test_get_encodes_body_as_query_parameters():
    controller, seen = _controller(lambda request: httpx.Response(200, json={"results": []}))

    asyncio.run(
        controller.request("GET", "classes/_JobStatus", {"where": {"objectId": "abc"}, "limit": 1})
    )

    params = seen[0].url.params
    assert json.loads(params["where"]) == {"objectId": "abc"}
    assert params["limit"] == "1"
    assert seen[0].content == b""


def test_server_error_body_becomes_cloud_error():
    controller, _ = _controller(
        lambda request: httpx.Response(400, json={"code": 141, "error": "boom"})
    )

    with pytest.raises(CloudError) as exc_info:
        asyncio.run(controller.request("POST", "functions/fail", {}))

    assert exc_info.value.code == ErrorCode.SCRIPT_FAILED
    assert exc_info.value.message == "boom"
    assert exc_info.value.details["status_code"] == 400


def test_unknown_server_error_code_is_preserved():
    controller, _ = _controller(
        lambda request: httpx.Response(400, json={"code": 9001, "error": "custom"})
    )

    with pytest.raises(CloudError) as exc_info:
        asyncio.run(controller.request("POST", "functions/fail", {}))

    assert exc_info.value.code == 9001


def test_non_json_error_is_reported_as_invalid_json():
    controller, _ = _controller(lambda request: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(CloudError) as exc_info:
        asyncio.run(controller.request("POST", "functions/fail", {}))

    assert exc_info.value.code == ErrorCode.INVALID_JSON
    assert "Bad Gateway" in exc_info.value.message


def test_invalid_json_success_body_is_reported():
    controller, _ = _controller(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(CloudError) as exc_info:
        asyncio.run(controller.request("POST", "functions/x", {}))

    assert exc_info.value.code == ErrorCode.INVALID_JSON


def test_network_errors_become_connection_failed():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    controller, _ = _controller(handler)

    with pytest.raises(CloudError) as exc_info:
        asyncio.run(controller.request("POST", "functions/x", {}))

    assert exc_info.value.code == ErrorCode.CONNECTION_FAILED
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_unsupported_method_is_rejected():
    controller, _ = _controller(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ValueError):
        asyncio.run(controller.request("PATCH", "functions/x"))


def test_context_header_encodes_non_json_values():
    controller, seen = _controller(lambda request: httpx.Response(200, json={}))

    asyncio.run(
        controller.request(
            "POST",
            "functions/x",
            {},
            {"context": {"at": datetime(2024, 1, 1, tzinfo=timezone.utc)}},
        )
    )

    assert json.loads(seen[0].headers["X-Parse-Cloud-Context"]) == {
        "at": {"__type": "Date", "iso": "2024-01-01T00:00:00.000Z"}
    }


def test_unencodable_context_raises_serialization_error_before_sending():
    controller, seen = _controller(lambda request: httpx.Response(200, json={}))

    with pytest.raises(SerializationError):
        asyncio.run(controller.request("POST", "functions/x", {}, {"context": {"v": object()}}))

    assert seen == []


def test_request_logs_propagate_to_application_handlers(caplog):
    caplog.set_level(logging.DEBUG, logger="cloudcode")
    controller, _ = _controller(
        lambda request: httpx.Response(200, json={}), log_level="DEBUG"
    )

    asyncio.run(controller.request("POST", "functions/x", {}))

    assert "POST https://api.example.test/parse/functions/x" in caplog.text

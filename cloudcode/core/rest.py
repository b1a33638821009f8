#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HTTP transport for the platform REST API.

The controller turns ``request(method, path, data, options)`` into one HTTP
call and returns the parsed JSON body. Transport and server failures are
raised as ``CloudError``; nothing is retried here.
"""

import json
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import CloudCodeConfig, get_config
from .data.codec import encode
from .utils.exceptions import CloudError, ErrorCode, ExceptionTranslator
from .utils.logger import ModernLogger

APPLICATION_ID_HEADER = "X-Parse-Application-Id"
JAVASCRIPT_KEY_HEADER = "X-Parse-JavaScript-Key"
MASTER_KEY_HEADER = "X-Parse-Master-Key"
SESSION_TOKEN_HEADER = "X-Parse-Session-Token"
CLOUD_CONTEXT_HEADER = "X-Parse-Cloud-Context"

_SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


class RESTController(ModernLogger):
    """
    ``httpx``-backed REST controller.

    A fresh ``httpx.AsyncClient`` is opened per request so the controller is
    not tied to any particular event loop. ``transport`` lets tests plug in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: Optional[CloudCodeConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or get_config()
        super().__init__(name="RESTController", level=self.config.log_level)
        self._transport = transport

    def build_url(self, path: str) -> str:
        return "{0}/{1}".format(self.config.server_url.rstrip("/"), path.lstrip("/"))

    def build_headers(self, options: Mapping[str, Any]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            APPLICATION_ID_HEADER: self.config.application_id,
        }
        if self.config.javascript_key:
            headers[JAVASCRIPT_KEY_HEADER] = self.config.javascript_key

        if options.get("use_master_key"):
            if not self.config.master_key:
                raise CloudError(
                    ErrorCode.OTHER_CAUSE,
                    "Cannot use the Master Key, it has not been provided.",
                )
            headers[MASTER_KEY_HEADER] = self.config.master_key

        session_token = options.get("session_token")
        if session_token:
            headers[SESSION_TOKEN_HEADER] = str(session_token)

        context = options.get("context")
        if isinstance(context, Mapping):
            headers[CLOUD_CONTEXT_HEADER] = json.dumps(encode(dict(context)))
        return headers

    @staticmethod
    def _query_params(data: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for key, value in (data or {}).items():
            if isinstance(value, (dict, list)):
                params[key] = json.dumps(value)
            else:
                params[key] = str(value)
        return params

    async def request(
        self,
        method: str,
        path: str,
        data: Any = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        method = method.upper()
        if method not in _SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        headers = self.build_headers(options or {})
        url = self.build_url(path)
        request_kwargs: Dict[str, Any] = {"headers": headers}
        if method == "GET":
            request_kwargs["params"] = self._query_params(data)
        else:
            request_kwargs["json"] = data if data is not None else {}

        self.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, **request_kwargs)
        except httpx.HTTPError as exc:
            raise ExceptionTranslator.as_cloud_error(
                exc,
                ErrorCode.CONNECTION_FAILED,
                f"Connection to the server failed: {exc}",
            ) from exc

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                raise CloudError(
                    ErrorCode.INVALID_JSON,
                    "Received an invalid JSON response from the server.",
                    cause=exc,
                    status_code=response.status_code,
                ) from exc

        self.debug("Request failed with HTTP %s", response.status_code)
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, Mapping) and isinstance(body.get("code"), int):
            raise CloudError(
                body["code"],
                str(body.get("error", "")),
                status_code=response.status_code,
            )
        raise CloudError(
            ErrorCode.INVALID_JSON,
            f"Received an error with invalid JSON from the server: {response.text}",
            status_code=response.status_code,
        )

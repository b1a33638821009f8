#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception hierarchy for the cloudcode client.

Errors fall into three groups:
- argument errors raised synchronously at the call site
- server/protocol errors carrying a numeric platform error code
- local failures (serialization, controller wiring)
"""

import traceback
from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    """
    Platform error codes surfaced through ``CloudError``.
    """

    OTHER_CAUSE = -1
    CONNECTION_FAILED = 100
    OBJECT_NOT_FOUND = 101
    INVALID_JSON = 107
    SCRIPT_FAILED = 141


class CloudCodeError(Exception):
    """
    Base class for every error raised by the package.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        **details: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details: Dict[str, Any] = {
            key: value for key, value in details.items() if value is not None
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the error into a plain dictionary.
        """
        payload: Dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            payload["details"] = dict(self.details)
        if self.cause is not None:
            payload["cause"] = "{0}: {1}".format(type(self.cause).__name__, self.cause)
        return payload

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(CloudCodeError, TypeError):
    """
    Raised before any network activity when caller input is malformed.
    """

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message, argument=argument)
        self.argument = argument


class CloudError(CloudCodeError):
    """
    Error reported by the server, or by the client while talking to it.
    """

    def __init__(
        self,
        code: int,
        message: str,
        cause: Optional[BaseException] = None,
        **details: Any,
    ) -> None:
        super().__init__(message, cause=cause, **details)
        try:
            self.code: int = ErrorCode(code)
        except ValueError:
            self.code = int(code)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["code"] = int(self.code)
        return payload

    def __repr__(self) -> str:
        return "CloudError(code={0}, message={1!r})".format(int(self.code), self.message)


class SerializationError(CloudCodeError):
    """
    Raised when a value cannot be encoded for the wire or decoded from it.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        data_type: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause, operation=operation, data_type=data_type)
        self.operation = operation
        self.data_type = data_type


class ControllerNotRegisteredError(CloudCodeError):
    """
    Raised when a controller role is looked up before anything registered it.
    """

    def __init__(self, role: str) -> None:
        super().__init__(
            "No controller registered for role '{0}'".format(role), role=role
        )
        self.role = role


class ExceptionFormatter:
    """
    Human-readable rendering helpers for package errors.
    """

    @staticmethod
    def format_exception(exc: BaseException, include_traceback: bool = False) -> str:
        if isinstance(exc, CloudError):
            text = "[{0}] {1} (code {2})".format(
                type(exc).__name__, exc.message, int(exc.code)
            )
        elif isinstance(exc, CloudCodeError):
            text = "[{0}] {1}".format(type(exc).__name__, exc.message)
        else:
            text = "[{0}] {1}".format(type(exc).__name__, exc)

        if include_traceback and exc.__traceback__ is not None:
            text += "\n" + "".join(traceback.format_tb(exc.__traceback__))
        return text

    @staticmethod
    def format_exception_chain(exc: BaseException) -> str:
        parts = []
        current: Optional[BaseException] = exc
        seen = set()
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            parts.append(ExceptionFormatter.format_exception(current))
            current = current.__cause__ or getattr(current, "cause", None)
        return " <- ".join(parts)

    @staticmethod
    def format_exception_summary(exc: BaseException) -> str:
        return "{0}: {1}".format(type(exc).__name__, exc)


class ExceptionTranslator:
    """
    Map foreign exceptions onto the package taxonomy.
    """

    @staticmethod
    def as_cloud_error(
        exc: BaseException,
        code: int = ErrorCode.OTHER_CAUSE,
        message: Optional[str] = None,
    ) -> CloudError:
        if isinstance(exc, CloudError):
            return exc
        return CloudError(
            code,
            message or ExceptionFormatter.format_exception_summary(exc),
            cause=exc,
        )


__all__ = [
    "ErrorCode",
    "CloudCodeError",
    "InvalidArgumentError",
    "CloudError",
    "SerializationError",
    "ControllerNotRegisteredError",
    "ExceptionFormatter",
    "ExceptionTranslator",
]

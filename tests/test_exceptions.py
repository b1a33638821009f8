#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from cloudcode.core.utils import format_exception, format_exception_chain
from cloudcode.core.utils.exceptions import (
    CloudError,
    ErrorCode,
    ExceptionTranslator,
    InvalidArgumentError,
)


def test_cloud_error_to_dict_includes_code_and_details():
    error = CloudError(ErrorCode.SCRIPT_FAILED, "boom", status_code=400)

    assert error.to_dict() == {
        "error_type": "CloudError",
        "message": "boom",
        "details": {"status_code": 400},
        "code": 141,
    }
    assert str(error) == "boom"


def test_invalid_argument_error_is_type_error():
    error = InvalidArgumentError("bad name", argument="name")

    assert isinstance(error, TypeError)
    assert error.argument == "name"


def test_translator_wraps_foreign_exceptions_once():
    original = RuntimeError("socket closed")

    translated = ExceptionTranslator.as_cloud_error(original, ErrorCode.CONNECTION_FAILED)

    assert translated.code == ErrorCode.CONNECTION_FAILED
    assert translated.cause is original
    assert ExceptionTranslator.as_cloud_error(translated) is translated
    assert format_exception_chain(translated).endswith("[RuntimeError] socket closed")
    assert format_exception(translated) == "[CloudError] RuntimeError: socket closed (code 100)"

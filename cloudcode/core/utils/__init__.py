#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility exports for cloudcode core.
"""

from .logger import ModernLogger
from .exceptions import *  # noqa: F401,F403
from .exceptions import ExceptionFormatter, ExceptionTranslator

format_exception = ExceptionFormatter.format_exception
format_exception_chain = ExceptionFormatter.format_exception_chain
format_exception_summary = ExceptionFormatter.format_exception_summary

__all__ = [
    "ModernLogger",
    "ErrorCode",
    "CloudCodeError",
    "InvalidArgumentError",
    "CloudError",
    "SerializationError",
    "ControllerNotRegisteredError",
    "ExceptionFormatter",
    "ExceptionTranslator",
    "format_exception",
    "format_exception_chain",
    "format_exception_summary",
]

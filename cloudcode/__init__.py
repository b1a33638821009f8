#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
cloudcode public API with lazy imports.

Submodules (and ``httpx``) are only imported when the corresponding API
objects are requested.
"""

from importlib import import_module
from typing import Any, Dict, Tuple

from ._version import __version__

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "cloud": ("cloudcode.cloud", ""),
    "CloudFunctions": ("cloudcode.cloud", "CloudFunctions"),
    "DefaultCloudController": ("cloudcode.cloud", "DefaultCloudController"),
    "run": ("cloudcode.cloud", "run"),
    "get_jobs_data": ("cloudcode.cloud", "get_jobs_data"),
    "start_job": ("cloudcode.cloud", "start_job"),
    "get_job_status": ("cloudcode.cloud", "get_job_status"),
    "cloud_function": ("cloudcode.decorators", "cloud_function"),
    "cloud_job": ("cloudcode.decorators", "cloud_job"),
    "CloudFunction": ("cloudcode.decorators", "CloudFunction"),
    "CloudCodeConfig": ("cloudcode.core.config", "CloudCodeConfig"),
    "CoreManager": ("cloudcode.core.manager", "CoreManager"),
    "get_default_manager": ("cloudcode.core.manager", "get_default_manager"),
    "Query": ("cloudcode.core.query", "Query"),
    "RESTController": ("cloudcode.core.rest", "RESTController"),
    "CloudObject": ("cloudcode.core.data.objects", "CloudObject"),
    "GeoPoint": ("cloudcode.core.data.objects", "GeoPoint"),
    "CloudCodeError": ("cloudcode.core.utils.exceptions", "CloudCodeError"),
    "CloudError": ("cloudcode.core.utils.exceptions", "CloudError"),
    "ErrorCode": ("cloudcode.core.utils.exceptions", "ErrorCode"),
    "InvalidArgumentError": ("cloudcode.core.utils.exceptions", "InvalidArgumentError"),
}

__all__ = ["__version__", *sorted(_EXPORT_MAP.keys())]


def __getattr__(name: str) -> Any:
    """
    Resolve public API symbols lazily.
    """
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'cloudcode' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name) if attr_name else module
    globals()[name] = value
    return value

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
cloudcode core module exports (lazy-loaded).
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "CloudCodeConfig": ("cloudcode.core.config", "CloudCodeConfig"),
    "get_config": ("cloudcode.core.config", "get_config"),
    "set_config": ("cloudcode.core.config", "set_config"),
    "create_config": ("cloudcode.core.config", "create_config"),
    "CoreManager": ("cloudcode.core.manager", "CoreManager"),
    "get_default_manager": ("cloudcode.core.manager", "get_default_manager"),
    "reset_default_manager": ("cloudcode.core.manager", "reset_default_manager"),
    "Query": ("cloudcode.core.query", "Query"),
    "DefaultQueryController": ("cloudcode.core.query", "DefaultQueryController"),
    "RESTController": ("cloudcode.core.rest", "RESTController"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'cloudcode.core' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value

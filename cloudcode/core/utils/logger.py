#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging mixin shared by long-lived cloudcode components.
"""

import logging
from typing import Any, Union


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError("Unknown log level: {0}".format(level))
    return resolved


class ModernLogger:
    """
    Mixin exposing ``debug``/``info``/``warning``/``error`` on the instance.

    Subclasses call ``super().__init__(name=...)`` and then log through
    ``self``. The package root logger only gets a ``NullHandler``; records
    propagate so applications decide where they go.
    """

    _root_configured = False

    def __init__(self, name: str, level: Union[int, str] = "INFO") -> None:
        self._logger = logging.getLogger(
            name if name.startswith("cloudcode") else "cloudcode.{0}".format(name)
        )
        self._logger.setLevel(_coerce_level(level))
        ModernLogger._configure_root()

    @classmethod
    def _configure_root(cls) -> None:
        if cls._root_configured:
            return
        root = logging.getLogger("cloudcode")
        if not root.handlers:
            root.addHandler(logging.NullHandler())
        cls._root_configured = True

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_log_level(self, level: Union[int, str]) -> None:
        self._logger.setLevel(_coerce_level(level))

    def debug(self, message: str, *args: Any) -> None:
        self._logger.debug(message, *args)

    def info(self, message: str, *args: Any) -> None:
        self._logger.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self._logger.warning(message, *args)

    def error(self, message: str, *args: Any) -> None:
        self._logger.error(message, *args)

    def exception(self, message: str, *args: Any) -> None:
        self._logger.exception(message, *args)

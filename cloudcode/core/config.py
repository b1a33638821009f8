#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Client configuration for cloudcode.

Values come from explicit arguments first, then ``CLOUDCODE_*`` environment
variables, then the defaults below.
"""

import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

_ENV_PREFIX = "CLOUDCODE_"
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CloudCodeConfig:
    """
    Connection settings used by the REST transport.
    """

    server_url: str = "http://localhost:1337/parse"
    application_id: str = ""
    javascript_key: Optional[str] = None
    master_key: Optional[str] = None
    request_timeout: float = 30.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.server_url or not self.server_url.startswith(("http://", "https://")):
            raise ValueError(
                f"server_url must be an http(s) URL, got {self.server_url!r}"
            )
        if self.request_timeout <= 0:
            raise ValueError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CloudCodeConfig":
        """
        Build configuration from ``CLOUDCODE_*`` environment variables.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _read(key: str) -> Optional[str]:
            value = env.get(_ENV_PREFIX + key)
            if value is None:
                return None
            value = value.strip()
            return value or None

        raw_timeout = _read("TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else defaults.request_timeout
        except ValueError as exc:
            raise ValueError(
                f"{_ENV_PREFIX}TIMEOUT must be a number, got {raw_timeout!r}"
            ) from exc

        return cls(
            server_url=_read("SERVER_URL") or defaults.server_url,
            application_id=_read("APPLICATION_ID") or defaults.application_id,
            javascript_key=_read("JAVASCRIPT_KEY"),
            master_key=_read("MASTER_KEY"),
            request_timeout=timeout,
            log_level=(_read("LOG_LEVEL") or defaults.log_level).upper(),
        )

    def with_overrides(self, **overrides: Any) -> "CloudCodeConfig":
        return replace(self, **overrides)


_config_lock = threading.Lock()
_active_config: Optional[CloudCodeConfig] = None


def get_config() -> CloudCodeConfig:
    """
    Return the process configuration, loading it from the environment once.
    """
    global _active_config
    with _config_lock:
        if _active_config is None:
            _active_config = CloudCodeConfig.from_env()
        return _active_config


def set_config(config: Optional[CloudCodeConfig]) -> None:
    """
    Replace the process configuration. ``None`` forces a reload on next use.
    """
    global _active_config
    with _config_lock:
        _active_config = config


def create_config(**overrides: Any) -> CloudCodeConfig:
    """
    Build a configuration from the environment with explicit overrides applied.
    """
    return CloudCodeConfig.from_env().with_overrides(**overrides)

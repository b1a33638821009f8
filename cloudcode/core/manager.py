#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Controller registry for cloudcode.

A ``CoreManager`` holds one controller per role. Public entry points are
handed a manager explicitly; ``get_default_manager`` provides the shared
process-wide instance for callers that do not care.
"""

import threading
from typing import Any, Dict, Optional, Tuple

from .config import CloudCodeConfig, get_config
from .utils.exceptions import ControllerNotRegisteredError, InvalidArgumentError

CLOUD_CONTROLLER = "cloud"
REST_CONTROLLER = "rest"
QUERY_CONTROLLER = "query"

_REQUIRED_METHODS: Dict[str, Tuple[str, ...]] = {
    CLOUD_CONTROLLER: ("run", "get_jobs_data", "start_job"),
    REST_CONTROLLER: ("request",),
    QUERY_CONTROLLER: ("find",),
}


class CoreManager:
    """
    Registry of swappable controllers plus the configuration they share.

    Registering a controller for a role replaces the previous one without
    any conflict check.
    """

    def __init__(self, config: Optional[CloudCodeConfig] = None) -> None:
        self._config = config
        self._controllers: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> CloudCodeConfig:
        if self._config is None:
            self._config = get_config()
        return self._config

    @staticmethod
    def _require_methods(role: str, controller: Any) -> None:
        for method_name in _REQUIRED_METHODS.get(role, ()):
            if not callable(getattr(controller, method_name, None)):
                raise InvalidArgumentError(
                    "{0} controller must implement {1}()".format(
                        role.capitalize(), method_name
                    ),
                    argument="controller",
                )

    def set_controller(self, role: str, controller: Any) -> None:
        self._require_methods(role, controller)
        with self._lock:
            self._controllers[role] = controller

    def has_controller(self, role: str) -> bool:
        return role in self._controllers

    def get_controller(self, role: str) -> Any:
        with self._lock:
            controller = self._controllers.get(role)
            if controller is None:
                controller = self._create_default(role)
                self._controllers[role] = controller
            return controller

    def _create_default(self, role: str) -> Any:
        if role == REST_CONTROLLER:
            from .rest import RESTController

            return RESTController(self.config)
        if role == QUERY_CONTROLLER:
            from .query import DefaultQueryController

            return DefaultQueryController(self)
        raise ControllerNotRegisteredError(role)

    def get_cloud_controller(self) -> Any:
        return self.get_controller(CLOUD_CONTROLLER)

    def set_cloud_controller(self, controller: Any) -> None:
        self.set_controller(CLOUD_CONTROLLER, controller)

    def get_rest_controller(self) -> Any:
        return self.get_controller(REST_CONTROLLER)

    def set_rest_controller(self, controller: Any) -> None:
        self.set_controller(REST_CONTROLLER, controller)

    def get_query_controller(self) -> Any:
        return self.get_controller(QUERY_CONTROLLER)

    def set_query_controller(self, controller: Any) -> None:
        self.set_controller(QUERY_CONTROLLER, controller)


_default_manager_lock = threading.Lock()
_default_manager: Optional[CoreManager] = None


def get_default_manager() -> CoreManager:
    global _default_manager
    with _default_manager_lock:
        if _default_manager is None:
            _default_manager = CoreManager()
        return _default_manager


def reset_default_manager(manager: Optional[CoreManager] = None) -> CoreManager:
    """
    Swap the process-wide manager, mainly for tests.

    Returns the manager now in effect.
    """
    global _default_manager
    with _default_manager_lock:
        _default_manager = manager if manager is not None else CoreManager()
        return _default_manager

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Calling cloud functions and cloud jobs.

Entry points validate their arguments synchronously and hand the network work
to the cloud controller registered on a ``CoreManager``. Importing this module
registers ``DefaultCloudController`` on the default manager.

Usage:
    >>> from cloudcode import cloud
    >>> greeting = await cloud.run("hello", {"name": "Ada"})
    >>> status_id = await cloud.start_job("reindex", {"full": True})
    >>> status = await cloud.get_job_status(status_id)
"""

from typing import Any, Awaitable, Mapping, Optional

from .core.data.codec import encode
from .core.data.models import (
    CloudResponse,
    RequestOptions,
    build_request_options,
    master_key_options,
)
from .core.data.objects import CloudObject
from .core.manager import CLOUD_CONTROLLER, CoreManager, get_default_manager
from .core.query import Query
from .core.utils.exceptions import InvalidArgumentError
from .core.utils.logger import ModernLogger

JOB_STATUS_CLASS = "_JobStatus"


def _require_name(name: Any, kind: str) -> None:
    if not isinstance(name, str) or len(name) == 0:
        raise InvalidArgumentError(
            "Cloud {0} name must be a string.".format(kind), argument="name"
        )


class DefaultCloudController(ModernLogger):
    """
    Cloud controller that talks to the REST API of the manager it belongs to.
    """

    def __init__(self, manager: Optional[CoreManager] = None) -> None:
        super().__init__(name="DefaultCloudController")
        self._manager = manager or get_default_manager()
        self._level_applied = False
        # The import-time registration has no manager and must not load config yet.
        if manager is not None:
            self._apply_log_level()

    def _apply_log_level(self) -> None:
        if not self._level_applied:
            self.set_log_level(self._manager.config.log_level)
            self._level_applied = True

    async def run(self, name: str, data: Any, options: RequestOptions) -> Any:
        self._apply_log_level()
        rest = self._manager.get_rest_controller()
        payload = encode(data, disallow_unsaved=True)

        self.debug("Running cloud function %s", name)
        raw = await rest.request("POST", "functions/" + name, payload, options)
        return CloudResponse.parse(raw).result

    async def get_jobs_data(self, options: RequestOptions) -> Any:
        self._apply_log_level()
        rest = self._manager.get_rest_controller()
        return await rest.request("GET", "cloud_code/jobs/data", None, options)

    async def start_job(self, name: str, data: Any, options: RequestOptions) -> Any:
        self._apply_log_level()
        rest = self._manager.get_rest_controller()
        payload = encode(data, disallow_unsaved=True)

        self.debug("Starting cloud job %s", name)
        return await rest.request("POST", "jobs/" + name, payload, options)


class CloudFunctions:
    """
    Public entry points bound to one ``CoreManager``.

    Methods return awaitables; invalid names raise before one is created.
    """

    def __init__(self, manager: Optional[CoreManager] = None) -> None:
        self.manager = manager or get_default_manager()
        if not self.manager.has_controller(CLOUD_CONTROLLER):
            self.manager.set_cloud_controller(DefaultCloudController(self.manager))

    def run(
        self,
        name: str,
        data: Any = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Awaitable[Any]:
        """
        Call the cloud function ``name`` with ``data``.

        Resolves to the function's ``result``, or ``None`` when the server sent
        none.
        """
        _require_name(name, "function")
        request_options = build_request_options(options)
        return self.manager.get_cloud_controller().run(name, data, request_options)

    def get_jobs_data(self) -> Awaitable[Any]:
        """
        Fetch the server's description of the available cloud jobs.
        """
        return self.manager.get_cloud_controller().get_jobs_data(master_key_options())

    def start_job(self, name: str, data: Any = None) -> Awaitable[Any]:
        """
        Start the cloud job ``name``; resolves to its job status id.
        """
        _require_name(name, "job")
        return self.manager.get_cloud_controller().start_job(
            name, data, master_key_options()
        )

    def get_job_status(self, job_status_id: str) -> Awaitable[CloudObject]:
        """
        Look up a ``_JobStatus`` record by id.
        """
        query = Query(JOB_STATUS_CLASS, self.manager)
        return query.get(job_status_id, master_key_options())


def run(
    name: str, data: Any = None, options: Optional[Mapping[str, Any]] = None
) -> Awaitable[Any]:
    return CloudFunctions().run(name, data, options)


def get_jobs_data() -> Awaitable[Any]:
    return CloudFunctions().get_jobs_data()


def start_job(name: str, data: Any = None) -> Awaitable[Any]:
    return CloudFunctions().start_job(name, data)


def get_job_status(job_status_id: str) -> Awaitable[CloudObject]:
    return CloudFunctions().get_job_status(job_status_id)


get_default_manager().set_cloud_controller(DefaultCloudController())

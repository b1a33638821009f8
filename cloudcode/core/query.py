#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Collection queries.
"""

from typing import Any, Dict, List, Mapping, Optional

from .data.codec import decode, encode
from .data.models import build_request_options
from .data.objects import CloudObject
from .manager import CoreManager, get_default_manager
from .utils.exceptions import CloudError, ErrorCode, InvalidArgumentError
from .utils.logger import ModernLogger


class DefaultQueryController(ModernLogger):
    """
    Run queries through the manager's REST controller.
    """

    def __init__(self, manager: CoreManager) -> None:
        super().__init__(name="DefaultQueryController", level=manager.config.log_level)
        self._manager = manager

    async def find(
        self,
        class_name: str,
        params: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        self.debug("Querying collection %s", class_name)
        rest = self._manager.get_rest_controller()
        return await rest.request("GET", "classes/" + class_name, dict(params), options)


class Query:
    """
    Query over one collection.

    >>> status = await Query("_JobStatus").get("abc123", {"use_master_key": True})
    """

    def __init__(self, class_name: str, manager: Optional[CoreManager] = None) -> None:
        if not isinstance(class_name, str) or not class_name:
            raise InvalidArgumentError(
                "Query class name must be a non-empty string", argument="class_name"
            )
        self.class_name = class_name
        self._manager = manager or get_default_manager()
        self._where: Dict[str, Any] = {}
        self._limit: Optional[int] = None

    def equal_to(self, key: str, value: Any) -> "Query":
        self._where[key] = encode(value, disallow_unsaved=True)
        return self

    def limit(self, count: int) -> "Query":
        if count < 0:
            raise ValueError(f"limit must be non-negative, got {count}")
        self._limit = count
        return self

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"where": dict(self._where)}
        if self._limit is not None:
            params["limit"] = self._limit
        return params

    async def find(self, options: Optional[Mapping[str, Any]] = None) -> List[CloudObject]:
        controller = self._manager.get_query_controller()
        response = await controller.find(
            self.class_name, self.to_params(), build_request_options(options)
        )
        results = response.get("results", []) if isinstance(response, Mapping) else []
        return [
            CloudObject.from_server(self.class_name, item, decoder=decode)
            for item in results
        ]

    async def first(self, options: Optional[Mapping[str, Any]] = None) -> Optional[CloudObject]:
        previous_limit = self._limit
        self._limit = 1
        try:
            results = await self.find(options)
        finally:
            self._limit = previous_limit
        return results[0] if results else None

    async def get(
        self, object_id: str, options: Optional[Mapping[str, Any]] = None
    ) -> CloudObject:
        """
        Fetch one object by id, raising ``OBJECT_NOT_FOUND`` when it is missing.
        """
        self.equal_to("objectId", object_id)
        found = await self.first(options)
        if found is None:
            raise CloudError(ErrorCode.OBJECT_NOT_FOUND, "Object not found.")
        return found

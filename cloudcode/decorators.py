#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Decorator helpers for calling cloud functions and jobs like local coroutines.

Usage:
    >>> @cloud_function()
    ... async def average_stars(movie: str) -> float: ...
    >>> stars = await average_stars(movie="The Matrix")
"""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from .cloud import CloudFunctions
from .core.manager import CoreManager
from .core.utils.exceptions import InvalidArgumentError

T = TypeVar("T", bound=Callable[..., Any])


class CloudFunction:
    """
    Callable wrapper that routes a local call to a cloud function or job.

    Keyword arguments become the payload. The wrapped function body is never
    executed; it only supplies the name and signature.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        function_name: Optional[str] = None,
        is_job: bool = False,
        use_master_key: bool = False,
        session_token: Optional[str] = None,
        manager: Optional[CoreManager] = None,
    ) -> None:
        self.func = func
        self.function_name = function_name or func.__name__
        self.is_job = is_job
        self.use_master_key = use_master_key
        self.session_token = session_token
        self.manager = manager
        functools.update_wrapper(self, func)

    def _build_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.use_master_key:
            options["use_master_key"] = True
        if self.session_token:
            options["session_token"] = self.session_token
        return options

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if args:
            raise InvalidArgumentError(
                "Cloud function '{0}' only accepts keyword arguments".format(
                    self.function_name
                ),
                argument="args",
            )

        cloud = CloudFunctions(self.manager)
        if self.is_job:
            return await cloud.start_job(self.function_name, kwargs)
        return await cloud.run(self.function_name, kwargs, self._build_options())

    def __repr__(self) -> str:
        kind = "job" if self.is_job else "function"
        return "<CloudFunction {0} '{1}'>".format(kind, self.function_name)


def cloud_function(
    name: Optional[str] = None,
    use_master_key: bool = False,
    session_token: Optional[str] = None,
    manager: Optional[CoreManager] = None,
) -> Callable[[T], CloudFunction]:
    """
    Turn a stub into a call of the cloud function ``name`` (defaults to the
    stub's own name).
    """

    def decorator(func: T) -> CloudFunction:
        return CloudFunction(
            func,
            function_name=name,
            use_master_key=use_master_key,
            session_token=session_token,
            manager=manager,
        )

    return decorator


def cloud_job(
    name: Optional[str] = None, manager: Optional[CoreManager] = None
) -> Callable[[T], CloudFunction]:
    """
    Turn a stub into a starter for the cloud job ``name``.

    Awaiting the call resolves to the job status id.
    """

    def decorator(func: T) -> CloudFunction:
        return CloudFunction(func, function_name=name, is_job=True, manager=manager)

    return decorator

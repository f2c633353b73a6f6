"""
``@query`` / ``@mutation`` endpoint decorators.

A decorated service method returns a :class:`~boardstore.core.result.Result`
instead of raising: any :class:`StoreError` raised inside becomes
``Result.err``. Calls hold the service's ``lock``, so each read-modify-write
runs alone against its store. The decorator also tags the method so the
transport layer can tell read-only endpoints from mutating ones.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict

from ..core.result import Result, StoreError

LOGGER = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"


def _endpoint(kind: str) -> Callable:
    def decorator(fn: Callable) -> Callable:
        @wraps(fn)
        def inner(self, *args: Any, **kwargs: Any) -> Result:
            try:
                with self.lock:
                    return Result.ok(fn(self, *args, **kwargs))
            except StoreError as e:
                LOGGER.warning(
                    "%s %s.%s failed: %s", kind, type(self).__name__, fn.__name__, e
                )
                return Result.err(e)

        inner.__endpoint__ = kind  # type: ignore[attr-defined]
        return inner

    return decorator


query = _endpoint(QUERY)
mutation = _endpoint(MUTATION)


def endpoint_kind(fn: Callable) -> str | None:
    return getattr(fn, "__endpoint__", None)


def list_endpoints(service: object) -> Dict[str, str]:
    """Map endpoint name -> ``"query"`` | ``"mutation"`` for a service instance."""
    endpoints = {}
    for name in dir(type(service)):
        if name.startswith("_"):
            continue
        kind = endpoint_kind(getattr(type(service), name))
        if kind is not None:
            endpoints[name] = kind
    return endpoints

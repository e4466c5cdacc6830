"""Registry client capability and client resolution.

A registry client is anything with coroutine ``query``/``search`` methods
returning ``QueryResult``/``SearchResult`` (or mappings of the same shape).
A client resolver maps a registry endpoint (or bare key) to such a client; it
may be a plain function or a coroutine function.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, Union, runtime_checkable

from .errors import UnknownRegistryError
from .models import QueryOptions, QueryResult, SearchOptions, SearchResult

__all__ = ["RegistryClient", "ClientResolver", "resolve_client"]


@runtime_checkable
class RegistryClient(Protocol):
    async def query(
        self, options: Optional[QueryOptions] = None
    ) -> Union[QueryResult, Mapping[str, Any]]: ...

    async def search(
        self, options: Optional[SearchOptions] = None
    ) -> Union[SearchResult, Mapping[str, Any]]: ...


ClientResolver = Callable[[str], Union[RegistryClient, Awaitable[RegistryClient]]]


async def resolve_client(
    resolver: ClientResolver, key: str, registries: Optional[Mapping[str, str]] = None
) -> RegistryClient:
    """Resolve ``key`` through ``registries`` (key -> endpoint) and ``resolver``.

    Keys missing from ``registries`` are handed to the resolver unchanged.
    Resolver exceptions propagate; a resolver returning ``None`` is reported
    as an unknown registry.
    """
    endpoint = (registries or {}).get(key, key)
    client = resolver(endpoint)
    if inspect.isawaitable(client):
        client = await client
    if client is None:
        raise UnknownRegistryError(key)
    return client

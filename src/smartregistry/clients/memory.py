"""In-memory registry client and dictionary-backed resolver.

Useful as a stand-in registry: records are built from ``"namespace.name"`` or
``"namespace.name@version"`` strings (default version ``0.0.1``).

- ``query`` only finds exact, case-sensitive matches on id, name, version and
  namespace; unset options are wildcards.
- ``search`` matches ``query`` case-insensitively inside the id, description or
  display name, and ``category`` inside the record's categories, then pages
  with ``offset``/``size``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional
from urllib.parse import urljoin

from smartregistry.core.client import RegistryClient
from smartregistry.core.errors import UnknownRegistryError
from smartregistry.core.models import (
    Extension,
    ExtensionIdentity,
    QueryOptions,
    QueryResult,
    SearchOptions,
    SearchResult,
)

__all__ = ["InMemoryRegistryClient", "client_resolver"]

DEFAULT_VERSION = "0.0.1"


class InMemoryRegistryClient:
    def __init__(
        self,
        extensions: Iterable[str],
        base_url: str = "https://mock/",
        *,
        categories: Optional[Mapping[str, List[str]]] = None,
    ):
        self.base_url = base_url
        self.calls: List[tuple] = []
        timestamp = datetime.now(timezone.utc).isoformat()
        categories = categories or {}
        self.extensions: List[Extension] = []
        for text in extensions:
            ident = ExtensionIdentity.parse(text)
            version = ident.version or DEFAULT_VERSION
            self.extensions.append(
                Extension(
                    namespace=ident.namespace,
                    name=ident.name,
                    version=version,
                    display_name=ident.name,
                    description=f"Mock VS Code Extension for {ident.id}",
                    categories=list(categories.get(ident.id, [])),
                    url=self._url(f"/version/{ident.id}@{version}"),
                    download_count=0,
                    timestamp=timestamp,
                    files={"download": self._url(f"/download/{ident.id}")},
                )
            )

    async def query(self, options: Optional[QueryOptions] = None) -> QueryResult:
        self.calls.append(("query", options))
        opts = options or QueryOptions()
        return QueryResult(
            extensions=[
                ext
                for ext in self.extensions
                if _same(opts.extension_id, ext.id)
                and _same(opts.extension_name, ext.name)
                and _same(opts.extension_version, ext.version)
                and _same(opts.namespace_name, ext.namespace)
            ]
        )

    async def search(self, options: Optional[SearchOptions] = None) -> SearchResult:
        self.calls.append(("search", options))
        opts = options or SearchOptions()
        matched = [
            ext
            for ext in self.extensions
            if (
                _contains(opts.query, ext.id)
                or _contains(opts.query, ext.description)
                or _contains(opts.query, ext.display_name)
            )
            and (opts.category is None or any(_contains(opts.category, c) for c in ext.categories))
        ]
        offset = opts.offset or 0
        end = None if opts.size is None else offset + opts.size
        return SearchResult(offset=offset, extensions=matched[offset:end])

    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def __repr__(self) -> str:
        return f"<InMemoryRegistryClient {self.base_url} ({len(self.extensions)} extensions)>"


def _same(expected: Optional[str], value: Optional[str]) -> bool:
    """Case sensitive; unset ``expected`` matches anything."""
    return expected is None or expected == value


def _contains(needle: Optional[str], value: Optional[str]) -> bool:
    """Case insensitive; unset ``needle`` or ``value`` matches."""
    return needle is None or value is None or needle.lower() in value.lower()


def client_resolver(clients: Mapping[str, RegistryClient]):
    """Return a resolver looking endpoints up in ``clients``."""
    table: Dict[str, RegistryClient] = dict(clients)

    def resolve(uri: str) -> RegistryClient:
        client = table.get(uri)
        if client is None:
            raise UnknownRegistryError(uri, f"unknown client for URI={uri}")
        return client

    return resolve

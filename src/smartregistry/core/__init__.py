"""Core runtime aggregator (source of truth).

Purpose: expose the runtime building blocks from a single module. No extra
logic beyond imports/exports.

- ``models`` → ``Extension``, ``ExtensionIdentity``, option/result models
- ``config`` → ``RouterConfig``
- ``client`` → ``RegistryClient`` protocol, ``ClientResolver``
- ``errors`` → configuration error hierarchy
- ``router`` → ``RegistryRouter``, ``FilterBinding``
"""

from .client import ClientResolver, RegistryClient, resolve_client
from .config import FiltersConfig, RouterConfig
from .errors import ConfigurationError, UnknownConditionsError, UnknownRegistryError
from .models import (
    Extension,
    ExtensionIdentity,
    QueryOptions,
    QueryResult,
    SearchOptions,
    SearchResult,
    extension_id,
    versioned_extension_id,
)
from .router import FilterBinding, RegistryRouter

__all__ = [
    "ClientResolver",
    "ConfigurationError",
    "Extension",
    "ExtensionIdentity",
    "FilterBinding",
    "FiltersConfig",
    "QueryOptions",
    "QueryResult",
    "RegistryClient",
    "RegistryRouter",
    "RouterConfig",
    "SearchOptions",
    "SearchResult",
    "UnknownConditionsError",
    "UnknownRegistryError",
    "extension_id",
    "resolve_client",
    "versioned_extension_id",
]

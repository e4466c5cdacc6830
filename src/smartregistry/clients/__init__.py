"""Registry client implementations shipped with the package."""

from .memory import InMemoryRegistryClient, client_resolver

__all__ = ["InMemoryRegistryClient", "client_resolver"]

"""Exception types raised while building or running a registry router."""

from __future__ import annotations

from typing import Iterable, Tuple

__all__ = ["ConfigurationError", "UnknownConditionsError", "UnknownRegistryError"]


class ConfigurationError(ValueError):
    """Router configuration is invalid."""


class UnknownConditionsError(ConfigurationError):
    """A rule entry holds condition keys that no registered rule consumed."""

    def __init__(self, keys: Iterable[str]):
        self.keys: Tuple[str, ...] = tuple(keys)
        super().__init__(f"unknown conditions: {', '.join(self.keys)}")


class UnknownRegistryError(ConfigurationError, LookupError):
    """A registry key (or endpoint) could not be resolved to a client."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"unknown registry: {key!r}")

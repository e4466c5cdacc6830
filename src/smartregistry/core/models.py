"""Extension identity and registry request/response models (source of truth).

Everything the router reads from, or hands back to, a registry client is
modelled here with Pydantic. Field names are snake_case in Python and accept
the camelCase keys used by registry JSON (``extensionId``, ``namespaceName``,
``displayName`` ...).

Extension identity
------------------
- ``Extension``: one catalog record. Only ``namespace``, ``name`` and
  ``version`` are inspected by the router; every other field (documented or
  extra) is carried through untouched. Records are frozen.
- ``Extension.id`` is ``"namespace.name"``; ``Extension.versioned_id`` is
  ``"namespace.name@version"`` and raises ``ValueError`` without a version.
- ``ExtensionIdentity`` is the plain value form used to parse textual ids:
  the first ``.`` separates namespace from name, the first ``@`` separates
  the version. Namespace and name may not be empty.

Options
-------
- ``QueryOptions``: exact, case-sensitive match fields. Unset = wildcard.
- ``SearchOptions``: ``query``/``category`` substring terms plus
  ``offset`` (default 0) and ``size`` (default unbounded) paging.
- Both accept unmodelled keys (``includeAllVersions``, ``targetPlatform`` ...)
  and keep them, so every registry receives the options it was given.
- ``field_values()`` returns the set values: declared fields in declaration
  order, then unmodelled keys in the order they arrived.

Results
-------
``QueryResult(extensions)`` and ``SearchResult(offset, extensions)`` mirror
the registry client contract. Plain mappings are accepted wherever a model is
expected and coerced via ``model_validate``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "Extension",
    "ExtensionIdentity",
    "QueryOptions",
    "SearchOptions",
    "QueryResult",
    "SearchResult",
    "extension_id",
    "versioned_extension_id",
]


class _RegistryModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Extension(_RegistryModel):
    """A published extension as returned by a registry."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True
    )

    namespace: str
    name: str
    version: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    download_count: Optional[int] = None
    timestamp: Optional[str] = None
    files: Dict[str, str] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        return extension_id(self)

    @property
    def versioned_id(self) -> str:
        return versioned_extension_id(self)

    @property
    def identity(self) -> "ExtensionIdentity":
        return ExtensionIdentity(self.namespace, self.name, self.version)


@dataclass(frozen=True)
class ExtensionIdentity:
    namespace: str
    name: str
    version: Optional[str] = None

    @property
    def id(self) -> str:
        return extension_id(self)

    @property
    def versioned_id(self) -> str:
        return versioned_extension_id(self)

    @classmethod
    def parse(cls, text: str) -> "ExtensionIdentity":
        """Parse ``"namespace.name"`` or ``"namespace.name@version"``."""
        ident, sep, version = text.partition("@")
        namespace, dot, name = ident.partition(".")
        if not dot or not namespace or not name:
            raise ValueError(f"invalid extension id: {text!r}")
        if sep and not version:
            raise ValueError(f"invalid extension version in: {text!r}")
        return cls(namespace, name, version or None)

    def __str__(self) -> str:
        return self.versioned_id if self.version else self.id


def extension_id(extension: Any) -> str:
    """Return the canonical ``namespace.name`` id of an extension-like value."""
    return f"{extension.namespace}.{extension.name}"


def versioned_extension_id(extension: Any) -> str:
    if not extension.version:
        raise ValueError(f"extension {extension_id(extension)} has no version")
    return f"{extension_id(extension)}@{extension.version}"


class _OptionsModel(_RegistryModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def field_values(self) -> List[Any]:
        # Declared fields first, then unmodelled keys in arrival order.
        return [value for _, value in self if value is not None]


class QueryOptions(_OptionsModel):
    extension_id: Optional[str] = None
    extension_name: Optional[str] = None
    extension_version: Optional[str] = None
    namespace_name: Optional[str] = None


class SearchOptions(_OptionsModel):
    query: Optional[str] = None
    category: Optional[str] = None
    offset: Optional[int] = Field(default=None, ge=0)
    size: Optional[int] = Field(default=None, ge=0)


class QueryResult(_RegistryModel):
    extensions: List[Extension] = Field(default_factory=list)


class SearchResult(_RegistryModel):
    offset: int = 0
    extensions: List[Extension] = Field(default_factory=list)

"""SmartRegistry public API surface (source of truth).

- Public exports: ``RegistryRouter``, ``RouterConfig``, the option/result
  models, the rule toolkit (``RuleSet``, ``RouterFilter``,
  ``create_filter_rule``, built-in rules, ``default_rules``) and the error
  types.
- Import must stay lightweight: no router construction or client resolution
  happens at import time.
- Version string lives here as ``__version__``.
"""

__version__ = "0.1.0"

from .core import (
    ConfigurationError,
    Extension,
    ExtensionIdentity,
    QueryOptions,
    QueryResult,
    RegistryRouter,
    RouterConfig,
    SearchOptions,
    SearchResult,
    UnknownConditionsError,
    UnknownRegistryError,
)
from .rules import (
    ExtensionIdMatchesRule,
    RequestContainsRule,
    RouterFilter,
    RuleSet,
    create_filter_rule,
    default_rules,
)

__all__ = [
    "ConfigurationError",
    "Extension",
    "ExtensionIdMatchesRule",
    "ExtensionIdentity",
    "QueryOptions",
    "QueryResult",
    "RegistryRouter",
    "RequestContainsRule",
    "RouterConfig",
    "RouterFilter",
    "RuleSet",
    "SearchOptions",
    "SearchResult",
    "UnknownConditionsError",
    "UnknownRegistryError",
    "create_filter_rule",
    "default_rules",
]

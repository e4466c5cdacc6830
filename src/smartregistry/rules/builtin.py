"""Built-in filter rules (source of truth).

``RequestContainsRule`` – condition key ``ifRequestContains``
    Value: regular-expression source (case-insensitive). Builds a filter with

    - ``filter_search_options``: passes when no options were given, or when
      the expression matches ``query`` or ``category``;
    - ``filter_query_options``: passes when no options were given, or when
      the expression matches any set query field.

``ExtensionIdMatchesRule`` – condition key ``ifExtensionIdMatches``
    Value: regular-expression source (case-insensitive). Builds a filter whose
    ``filter_extension`` passes when the expression matches the entry's
    ``namespace.name`` id.

Both decline (return None) on non-string values so the key stays unconsumed.
A string that is not a valid expression raises ``ConfigurationError``.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from smartregistry.core.errors import ConfigurationError
from smartregistry.core.models import extension_id

from ._base_rule import RegExpTest, RouterFilter, RuleSet, create_filter_rule

__all__ = [
    "REQUEST_CONTAINS",
    "EXTENSION_ID_MATCHES",
    "RequestContainsRule",
    "ExtensionIdMatchesRule",
    "request_contains_filter",
    "extension_id_matches_filter",
    "default_rules",
]

REQUEST_CONTAINS = "ifRequestContains"
EXTENSION_ID_MATCHES = "ifExtensionIdMatches"


def _compile(condition_key: str, source: str) -> RegExpTest:
    try:
        return RegExpTest.compile(source)
    except re.error as exc:
        raise ConfigurationError(f"invalid expression for {condition_key}: {exc}") from exc


def request_contains_filter(matcher: RegExpTest) -> RouterFilter:
    def filter_search_options(options) -> bool:
        return options is None or matcher.any([options.query, options.category])

    def filter_query_options(options) -> bool:
        return options is None or matcher.any(options.field_values())

    return RouterFilter(
        filter_query_options=filter_query_options,
        filter_search_options=filter_search_options,
    )


def extension_id_matches_filter(matcher: RegExpTest) -> RouterFilter:
    return RouterFilter(filter_extension=lambda extension: matcher.test(extension_id(extension)))


def _request_contains(value: Any) -> Optional[RouterFilter]:
    if isinstance(value, str):
        return request_contains_filter(_compile(REQUEST_CONTAINS, value))
    return None


def _extension_id_matches(value: Any) -> Optional[RouterFilter]:
    if isinstance(value, str):
        return extension_id_matches_filter(_compile(EXTENSION_ID_MATCHES, value))
    return None


RequestContainsRule = create_filter_rule(REQUEST_CONTAINS, _request_contains)
ExtensionIdMatchesRule = create_filter_rule(EXTENSION_ID_MATCHES, _extension_id_matches)


def default_rules() -> RuleSet:
    """Return a fresh rule set holding the built-in rules."""
    return RuleSet(requests=[RequestContainsRule], results=[ExtensionIdMatchesRule])

"""Rule compiler: turn one rule entry into filters.

Every registered rule sees the same entry and the same ``remaining_keys`` set;
produced filters keep rule registration order. Whatever is left in
``remaining_keys`` afterwards (``use`` aside) is reported through
``UnknownConditionsError``.
"""

from __future__ import annotations

import inspect
from typing import Any, List, Mapping, Sequence

from smartregistry.core.config import USE_KEY
from smartregistry.core.errors import UnknownConditionsError

from ._base_rule import FilterRule, RouterFilter

__all__ = ["compile_filters"]


async def compile_filters(
    conditions: Mapping[str, Any], rules: Sequence[FilterRule]
) -> List[RouterFilter]:
    remaining_keys = set(conditions)
    remaining_keys.discard(USE_KEY)
    filters: List[RouterFilter] = []
    for rule in rules:
        produced = rule(conditions, remaining_keys)
        if inspect.isawaitable(produced):
            produced = await produced
        if produced is None:
            continue
        if not isinstance(produced, RouterFilter):
            raise TypeError(
                f"Rule {getattr(rule, '__name__', rule)!r} returned "
                f"{type(produced).__name__}, expected RouterFilter"
            )
        filters.append(produced)
    if remaining_keys:
        # Keep the entry's own key order in the message.
        raise UnknownConditionsError(key for key in conditions if key in remaining_keys)
    return filters

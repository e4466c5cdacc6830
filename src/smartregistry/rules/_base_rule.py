"""Filter and rule contract definitions used by the router (source of truth).

If this module were wiped except for this docstring, the implementation must be
reconstructed exactly as described below.

Objects
~~~~~~~
``RouterFilter``
    Frozen dataclass with three explicit, optional hook slots:

    - ``filter_query_options(options)`` – verdict on a ``QueryOptions`` (or None)
    - ``filter_search_options(options)`` – verdict on a ``SearchOptions`` (or None)
    - ``filter_extension(extension)`` – verdict on one fetched ``Extension``

    Hooks return a boolean-like value or an awaitable of one. ``hook(kind)``
    returns the slot for ``"query"``, ``"search"`` or ``"extension"``;
    ``evaluate(kind, value)`` awaits the verdict and returns ``bool``. An empty
    slot never matches (it is not an error).

``FilterRule``
    Callable ``(conditions, remaining_keys) -> RouterFilter | None`` (the
    return may also be awaitable). A rule reads only the condition keys it
    understands; when it builds a filter it removes the consumed keys from
    ``remaining_keys``. Absent or malformed values make it return ``None`` and
    leave ``remaining_keys`` untouched.

``create_filter_rule(condition_key, factory)``
    Builds a rule consuming a single key: ``factory(conditions.get(key))``
    yields a filter or None. The rule carries ``condition_key`` and a readable
    ``__name__``.

``RegExpTest``
    Composable helper holding a compiled case-insensitive pattern.
    ``test(value)`` is False for non-strings, else ``pattern.search(value)``.

``RuleSet``
    Explicit, ordered registration lists ``requests`` and ``results``.
    ``register(stage, rule)`` rejects non-callables (``TypeError``) and unknown
    stages (``ValueError``); registering the same rule twice is idempotent.
    ``copy()`` returns an independent set. No process-wide registry exists.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Set, Union

__all__ = [
    "EXTENSION",
    "QUERY",
    "SEARCH",
    "FilterRule",
    "RegExpTest",
    "RouterFilter",
    "RuleSet",
    "create_filter_rule",
]

QUERY = "query"
SEARCH = "search"
EXTENSION = "extension"

_HOOK_SLOTS = {
    QUERY: "filter_query_options",
    SEARCH: "filter_search_options",
    EXTENSION: "filter_extension",
}

Verdict = Union[Any, Awaitable[Any]]


@dataclass(frozen=True)
class RouterFilter:
    """Predicate with optional hooks for requests and fetched entries."""

    filter_query_options: Optional[Callable[[Any], Verdict]] = None
    filter_search_options: Optional[Callable[[Any], Verdict]] = None
    filter_extension: Optional[Callable[[Any], Verdict]] = None

    def hook(self, kind: str) -> Optional[Callable[[Any], Verdict]]:
        try:
            slot = _HOOK_SLOTS[kind]
        except KeyError:
            raise ValueError(f"Unknown filter kind '{kind}'") from None
        return getattr(self, slot)

    def supports(self, kind: str) -> bool:
        return self.hook(kind) is not None

    async def evaluate(self, kind: str, value: Any) -> bool:
        hook = self.hook(kind)
        if hook is None:
            return False
        verdict = hook(value)
        if inspect.isawaitable(verdict):
            verdict = await verdict
        return bool(verdict)


FilterRule = Callable[
    [Mapping[str, Any], Set[str]],
    Union[Optional[RouterFilter], Awaitable[Optional[RouterFilter]]],
]


def create_filter_rule(
    condition_key: str, factory: Callable[[Any], Optional[RouterFilter]]
) -> FilterRule:
    """Create a rule handling the single condition ``condition_key``."""

    def rule(conditions: Mapping[str, Any], remaining_keys: Set[str]) -> Optional[RouterFilter]:
        router_filter = factory(conditions.get(condition_key))
        if router_filter is not None:
            remaining_keys.discard(condition_key)
        return router_filter

    rule.condition_key = condition_key  # type: ignore[attr-defined]
    rule.__name__ = f"rule<{condition_key}>"
    rule.__qualname__ = rule.__name__
    return rule


@dataclass(frozen=True)
class RegExpTest:
    pattern: "re.Pattern[str]"

    @classmethod
    def compile(cls, source: str) -> "RegExpTest":
        return cls(re.compile(source, re.IGNORECASE))

    def test(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def any(self, values: Iterable[Any]) -> bool:
        return any(self.test(value) for value in values)


@dataclass
class RuleSet:
    """Ordered request/result rule lists handed to the rule compiler."""

    requests: List[FilterRule] = field(default_factory=list)
    results: List[FilterRule] = field(default_factory=list)

    STAGES = ("requests", "results")

    def register(self, stage: str, rule: FilterRule) -> "RuleSet":
        if stage not in self.STAGES:
            raise ValueError(
                f"Unknown rule stage '{stage}'. Available stages: {', '.join(self.STAGES)}"
            )
        if not callable(rule):
            raise TypeError(f"Rule must be callable, got {type(rule).__name__}")
        bucket = self.stage(stage)
        if rule not in bucket:
            bucket.append(rule)
        return self

    def stage(self, stage: str) -> List[FilterRule]:
        return self.requests if stage == "requests" else self.results

    def copy(self) -> "RuleSet":
        return RuleSet(list(self.requests), list(self.results))

    def describe(self) -> Dict[str, List[str]]:
        return {
            stage: [getattr(rule, "__name__", repr(rule)) for rule in self.stage(stage)]
            for stage in self.STAGES
        }

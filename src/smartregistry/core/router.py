"""Federated registry router (source of truth).

If this module disappeared, rebuild it exactly as described. ``RegistryRouter``
looks like a single registry client (``query``/``search``) while fanning every
call out to several registry clients selected by compiled request filters, then
dropping fetched entries through compiled result filters.

Construction
------------
``await RegistryRouter.from_config(config, resolver, rules=None)``

1. ``config`` (``RouterConfig``, mapping or JSON text) is validated; ``use``
   becomes an ordered list of registry keys.
2. Every ``filters.requests`` entry is compiled with ``rules.requests`` into a
   ``FilterBinding`` (compiled filters + the entry's ``use`` tuple, or ``None``
   for "disable").
3. ``filters.results`` entries are compiled the same way with ``rules.results``.
4. A client is resolved for every key of ``use`` and every key named by a
   binding (``registries[key]`` is the endpoint when present, else the key).
   Resolver errors propagate; construction fails on the first unknown key.
5. ``rules`` defaults to ``default_rules()``.

The router never mutates its bindings, ``use`` order or clients afterwards.

Bindings
--------
A ``FilterBinding`` matches a value when every one of its filters passes for
that kind (``"query"``, ``"search"`` or ``"extension"``). A filter without the
matching hook fails, so a binding without a relevant hook never matches. A
binding without filters (an entry holding only ``use``) matches everything.

Calls
-----
``query(options=None)`` / ``search(options=None)``:

- *Selection*: start from ``use``; each matching request binding, in order,
  intersects the candidates with its ``use`` (``None`` clears them). The
  result keeps ``use`` order and is exposed as ``dispatch_set()``.
- *Fan-out*: every dispatched client is called concurrently
  (``asyncio.gather``). No dispatch when the set is empty.
- *Result filtering*: per registry, an entry is dropped when a result binding
  matches it and that binding's ``use`` does not include the registry. Entries
  nothing excludes survive (default-allow).
- *Merge*: survivors are concatenated in ``use`` order, independent of
  completion order. ``search`` always reports ``offset=0``.
- Client failures propagate: the whole call fails, no partial results.
- Options reach every registry unchanged, unmodelled keys included.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from smartregistry.core.client import ClientResolver, RegistryClient, resolve_client
from smartregistry.core.config import USE_KEY, RouterConfig, normalize_use
from smartregistry.core.errors import UnknownRegistryError
from smartregistry.core.models import (
    Extension,
    QueryOptions,
    QueryResult,
    SearchOptions,
    SearchResult,
)
from smartregistry.rules._base_rule import EXTENSION, QUERY, SEARCH, RouterFilter, RuleSet
from smartregistry.rules.builtin import default_rules
from smartregistry.rules.compiler import compile_filters

__all__ = ["FilterBinding", "RegistryRouter"]

logger = logging.getLogger("smartregistry")

_OPTION_MODELS = {QUERY: QueryOptions, SEARCH: SearchOptions}


def _coerce_options(kind: str, options: Any) -> Any:
    if options is None:
        return None
    try:
        model = _OPTION_MODELS[kind]
    except KeyError:
        raise ValueError(f"Unknown call kind '{kind}'") from None
    return model.model_validate(options)


@dataclass(frozen=True)
class FilterBinding:
    """Compiled rule entry: its filters and the registries it allows."""

    filters: Tuple[RouterFilter, ...]
    use: Optional[Tuple[str, ...]]

    def allows(self, key: str) -> bool:
        return self.use is not None and key in self.use

    async def matches(self, kind: str, value: Any) -> bool:
        for router_filter in self.filters:
            if not await router_filter.evaluate(kind, value):
                return False
        return True

    def describe(self) -> Dict[str, Any]:
        hooks = {
            kind
            for router_filter in self.filters
            for kind in (QUERY, SEARCH, EXTENSION)
            if router_filter.supports(kind)
        }
        return {
            "use": list(self.use) if self.use is not None else None,
            "hooks": sorted(hooks),
        }


class RegistryRouter:
    """Client-like facade over several registry clients."""

    __slots__ = (
        "_use",
        "_registries",
        "_clients",
        "_request_bindings",
        "_result_bindings",
    )

    def __init__(
        self,
        use: Iterable[str],
        clients: Mapping[str, RegistryClient],
        request_bindings: Sequence[FilterBinding] = (),
        result_bindings: Sequence[FilterBinding] = (),
        *,
        registries: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._use: Tuple[str, ...] = tuple(dict.fromkeys(use))
        missing = [key for key in self._use if key not in clients]
        if missing:
            raise UnknownRegistryError(missing[0])
        self._clients = MappingProxyType(dict(clients))
        self._registries = MappingProxyType(dict(registries or {}))
        self._request_bindings: Tuple[FilterBinding, ...] = tuple(request_bindings)
        self._result_bindings: Tuple[FilterBinding, ...] = tuple(result_bindings)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    async def from_config(
        cls,
        config: Any,
        resolver: ClientResolver,
        rules: Optional[RuleSet] = None,
    ) -> "RegistryRouter":
        cfg = RouterConfig.coerce(config)
        rules = rules if rules is not None else default_rules()
        request_bindings = await cls._compile_bindings(cfg.filters.requests, rules.requests)
        result_bindings = await cls._compile_bindings(cfg.filters.results, rules.results)

        keys: Dict[str, None] = dict.fromkeys(cfg.use)
        for binding in request_bindings + result_bindings:
            keys.update(dict.fromkeys(binding.use or ()))
        clients: Dict[str, RegistryClient] = {}
        for key in keys:
            clients[key] = await resolve_client(resolver, key, cfg.registries)

        router = cls(
            cfg.use,
            clients,
            request_bindings,
            result_bindings,
            registries=cfg.registries,
        )
        logger.debug(
            "router ready: use=%s requests=%d results=%d",
            ",".join(router.use),
            len(request_bindings),
            len(result_bindings),
        )
        return router

    @staticmethod
    async def _compile_bindings(
        entries: Sequence[Mapping[str, Any]], rules: Sequence[Any]
    ) -> Tuple[FilterBinding, ...]:
        bindings: List[FilterBinding] = []
        for entry in entries:
            filters = await compile_filters(entry, rules)
            bindings.append(FilterBinding(tuple(filters), normalize_use(entry.get(USE_KEY))))
        return tuple(bindings)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def use(self) -> Tuple[str, ...]:
        return self._use

    @property
    def registries(self) -> Mapping[str, str]:
        return self._registries

    @property
    def request_bindings(self) -> Tuple[FilterBinding, ...]:
        return self._request_bindings

    @property
    def result_bindings(self) -> Tuple[FilterBinding, ...]:
        return self._result_bindings

    def client(self, key: str) -> RegistryClient:
        try:
            return self._clients[key]
        except KeyError:
            raise UnknownRegistryError(key) from None

    def describe(self) -> Dict[str, Any]:
        return {
            "use": list(self._use),
            "registries": dict(self._registries),
            "requests": [binding.describe() for binding in self._request_bindings],
            "results": [binding.describe() for binding in self._result_bindings],
        }

    # ------------------------------------------------------------------
    # Registry client surface
    # ------------------------------------------------------------------
    async def query(self, options: Any = None) -> QueryResult:
        return QueryResult(extensions=await self._run(QUERY, _coerce_options(QUERY, options)))

    async def search(self, options: Any = None) -> SearchResult:
        extensions = await self._run(SEARCH, _coerce_options(SEARCH, options))
        return SearchResult(offset=0, extensions=extensions)

    async def dispatch_set(self, kind: str, options: Any = None) -> Tuple[str, ...]:
        """Registries a ``kind`` call with ``options`` is sent to, in ``use`` order."""
        options = _coerce_options(kind, options)
        candidates = list(self._use)
        for binding in self._request_bindings:
            if not candidates:
                break
            if await binding.matches(kind, options):
                candidates = [key for key in candidates if binding.allows(key)]
        return tuple(candidates)

    async def _run(self, kind: str, options: Any) -> List[Extension]:
        dispatch = await self.dispatch_set(kind, options)
        logger.debug("%s start: dispatch=%s", kind, ",".join(dispatch) or "-")
        if not dispatch:
            return []
        t0 = time.perf_counter()
        # gather keeps argument order, which is the ``use`` order.
        per_registry = await asyncio.gather(*(self._fetch(kind, key, options) for key in dispatch))
        merged = [extension for extensions in per_registry for extension in extensions]
        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug("%s end (%.2f ms): %d extensions", kind, elapsed, len(merged))
        return merged

    async def _fetch(self, kind: str, key: str, options: Any) -> List[Extension]:
        client = self._clients[key]
        if kind == QUERY:
            result = QueryResult.model_validate(await client.query(options))
        else:
            result = SearchResult.model_validate(await client.search(options))
        kept: List[Extension] = []
        for extension in result.extensions:
            if await self._accepts(key, extension):
                kept.append(extension)
        return kept

    async def _accepts(self, key: str, extension: Extension) -> bool:
        for index, binding in enumerate(self._result_bindings):
            if binding.allows(key):
                continue
            if await binding.matches(EXTENSION, extension):
                logger.debug(
                    "dropped %s from %s (result filter #%d)", extension.id, key, index
                )
                return False
        return True


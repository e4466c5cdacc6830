"""Router configuration schema (source of truth).

JSON-compatible shape::

    {
      "registries": {"<key>": "<endpoint>", ...},        # optional
      "use": "<key>" | ["<key>", ...],
      "filters": {                                       # optional
        "requests": [{<conditions>..., "use": <key>|[<key>...]|null}, ...],
        "results":  [{<conditions>..., "use": <key>|[<key>...]|null}, ...]
      }
    }

Rules
-----
- ``use`` is normalised to an ordered list of keys; a bare string becomes a
  one-element list and duplicates keep their first position.
- Rule entries stay plain dicts: which keys are valid is decided by the
  registered rules at compile time, not by this schema.
- ``normalize_use`` turns a rule entry's ``use`` into a tuple of keys, or
  ``None`` when it is ``null``/absent (the "exclude" marker). Anything other
  than a string or a list of strings is a ``ConfigurationError``.
- ``RouterConfig.coerce`` accepts a ``RouterConfig``, a mapping or a JSON
  string. Shape errors surface as ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigurationError

__all__ = ["FiltersConfig", "RouterConfig", "USE_KEY", "normalize_use"]

USE_KEY = "use"


def _dedupe(keys: List[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            ordered.append(key)
    return ordered


def normalize_use(value: Any) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(_dedupe(list(value)))
    raise ConfigurationError(
        f"'use' must be a registry key, a list of keys or null (got {value!r})"
    )


class FiltersConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    requests: List[Dict[str, Any]] = Field(default_factory=list)
    results: List[Dict[str, Any]] = Field(default_factory=list)


class RouterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    registries: Dict[str, str] = Field(default_factory=dict)
    use: List[str]
    filters: FiltersConfig = Field(default_factory=FiltersConfig)

    @field_validator("use", mode="before")
    @classmethod
    def _normalize_use(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return _dedupe(list(value)) if all(isinstance(v, str) for v in value) else value
        return value

    @classmethod
    def coerce(cls, config: Union["RouterConfig", Mapping[str, Any], str]) -> "RouterConfig":
        if isinstance(config, RouterConfig):
            return config
        if isinstance(config, str):
            return cls.model_validate_json(config)
        return cls.model_validate(dict(config))

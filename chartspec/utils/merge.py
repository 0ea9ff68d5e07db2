from __future__ import annotations

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, Mapping


def deep_merge(base: Dict[str, Any], upd: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``upd`` into a copy of ``base``; lists on both sides are concatenated."""

    merged = deepcopy(base)
    for key, value in (upd or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        elif isinstance(value, list) and isinstance(merged.get(key), list):
            merged[key] = merged[key] + deepcopy(value)
        else:
            merged[key] = deepcopy(value)
    return merged


def drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    """Remove keys whose value is None; the grammar has no null for unset properties."""

    return {key: value for key, value in values.items() if value is not None}


def freeze(value: Any) -> Any:
    """Deep copy ``value`` into read-only mappings and tuples."""

    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``freeze``: plain dicts and lists, safe to mutate."""

    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value

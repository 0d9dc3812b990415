"""Canonical deep merge utilities.

This module is the single source of truth for option merging throughout
folio. ``Extendable.configure()`` and the config layers both import from here.

Semantics:
- Plain dictionaries merge recursively
- Everything else (lists, tuples, objects) is replaced by the override
"""
from __future__ import annotations

from typing import Any, Dict, Mapping


def is_plain_dict(value: Any) -> bool:
    """Return True for plain mappings that take part in recursive merges."""
    return isinstance(value, dict)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}, "levels": [1, 2, 3]}
        >>> override = {"b": {"d": 3}, "levels": [1]}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}, 'levels': [1]}
    """
    result: Dict[str, Any] = dict(base or {})
    for key, value in (override or {}).items():
        if key in result and is_plain_dict(result[key]) and is_plain_dict(value):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


__all__ = ["deep_merge", "is_plain_dict"]

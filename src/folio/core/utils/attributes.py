"""Attribute helpers shared by schema building and rendering."""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional


def call_or_return(value: Any, *args: Any) -> Any:
    """Call ``value`` with ``args`` when it is callable, otherwise return it."""
    if callable(value):
        return value(*args)
    return value


def from_string(value: Any) -> Any:
    """Decode a raw external attribute value.

    Strings are JSON-decoded when possible (``"3"`` -> 3, ``"true"`` -> True);
    anything that does not decode is returned unchanged.

    Examples:
        >>> from_string("3")
        3
        >>> from_string("left")
        'left'
        >>> from_string(None) is None
        True
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


def merge_attributes(*attribute_sets: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge several rendered attribute mappings.

    ``class`` values are concatenated and de-duplicated, ``style`` values are
    joined with ``"; "``; any other key is overwritten by later sets.

    Example:
        >>> merge_attributes({"class": "a b"}, {"class": "b c", "id": "x"})
        {'class': 'a b c', 'id': 'x'}
    """
    result: Dict[str, Any] = {}

    for attributes in attribute_sets:
        if not attributes:
            continue

        for key, value in attributes.items():
            if key == "class":
                existing = str(result["class"]).split(" ") if result.get("class") else []
                incoming = str(value).split(" ") if value else []
                merged = []
                for cls in [*existing, *incoming]:
                    if cls and cls not in merged:
                        merged.append(cls)
                result["class"] = " ".join(merged)
                continue

            if key == "style":
                result["style"] = "; ".join(s for s in (result.get("style"), value) if s)
                continue

            result[key] = value

    return result


__all__ = ["call_or_return", "from_string", "merge_attributes"]

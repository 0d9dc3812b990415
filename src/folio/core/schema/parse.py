"""Parse-rule attribute injection."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from folio.core.utils.attributes import from_string

from .attributes import AttributeSpec


def read_element_attribute(element: Any, name: str) -> Any:
    """Read a raw attribute from a DOM-like element.

    Supports objects with ``get_attribute(name)`` and anything with a
    mapping-style ``get(name)`` (plain dicts, ``xml.etree`` elements).
    """
    getter = getattr(element, "get_attribute", None)
    if getter is None:
        getter = getattr(element, "get", None)
    if getter is None:
        return None
    return getter(name)


def inject_extension_attributes_to_parse_rule(
    rule: Mapping[str, Any],
    attributes: Mapping[str, AttributeSpec],
) -> Dict[str, Any]:
    """Return a copy of ``rule`` whose ``get_attrs`` also parses ``attributes``.

    Style rules are returned unchanged. If the rule's own ``get_attrs``
    returns False the element is still rejected.
    """
    if "style" in rule:
        return dict(rule)

    own_get_attrs = rule.get("get_attrs")
    own_attrs = rule.get("attrs")

    def get_attrs(element: Any) -> Union[Dict[str, Any], bool]:
        old = own_get_attrs(element) if own_get_attrs is not None else own_attrs
        if old is False:
            return False

        parsed: Dict[str, Any] = {}
        for name, spec in attributes.items():
            if spec.parse_html is not None:
                value = spec.parse_html(element)
            else:
                value = from_string(read_element_attribute(element, name))
            if value is None:
                continue
            parsed[name] = value

        return {**dict(old or {}), **parsed}

    injected = dict(rule)
    injected["get_attrs"] = get_attrs
    return injected


__all__ = ["inject_extension_attributes_to_parse_rule", "read_element_attribute"]

"""Attribute specs and their aggregation across extensions.

Global attributes (``add_global_attributes`` on any extension) are recorded
first, in resolution order, followed by the local attributes of structural
extensions (``add_attributes``). Later records for the same
``(type, attribute)`` pair replace earlier ones, whatever their priority.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from folio.core.extensions import Extendable
from folio.core.resolution import split_extensions

logger = logging.getLogger(__name__)


class _NoDefault:
    """Marker for a required attribute that has no resolvable default."""

    _instance: Optional["_NoDefault"] = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()

SPEC_KEYS = frozenset(
    {"default", "rendered", "parse_html", "render_html", "keep_on_split", "is_required", "validate"}
)

BASE_DEFAULTS: Dict[str, Any] = {
    "rendered": True,
    "keep_on_split": True,
    "is_required": False,
}


@dataclass(frozen=True)
class AttributeSpec:
    """One attribute of a node or mark type, with every field filled."""

    default: Any = None
    rendered: bool = True
    parse_html: Optional[Callable[[Any], Any]] = None
    render_html: Optional[Callable[[Mapping[str, Any]], Optional[Mapping[str, Any]]]] = None
    keep_on_split: bool = True
    is_required: bool = False
    validate: Any = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @classmethod
    def from_mapping(
        cls,
        raw: Optional[Mapping[str, Any]],
        *,
        defaults: Optional[Mapping[str, Any]] = None,
        owner: str = "",
    ) -> "AttributeSpec":
        """Fill omitted fields and evaluate a default factory once.

        A required attribute declared without ``default`` gets ``NO_DEFAULT``
        so that instance construction can tell "no default" from ``None``.
        Unknown keys are logged and ignored.
        """
        raw = dict(raw or {})
        unknown = sorted(set(raw) - SPEC_KEYS)
        if unknown:
            logger.warning("Ignoring unknown attribute spec keys %s in '%s'", unknown, owner)

        filled = {**BASE_DEFAULTS, **dict(defaults or {})}
        is_required = bool(raw.get("is_required", filled["is_required"]))

        if "default" in raw:
            default = raw["default"]
            if callable(default):
                default = default()
        elif is_required:
            default = NO_DEFAULT
        else:
            default = None

        return cls(
            default=default,
            rendered=bool(raw.get("rendered", filled["rendered"])),
            parse_html=raw.get("parse_html"),
            render_html=raw.get("render_html"),
            keep_on_split=bool(raw.get("keep_on_split", filled["keep_on_split"])),
            is_required=is_required,
            validate=raw.get("validate"),
        )


@dataclass(frozen=True)
class ExtensionAttribute:
    """An attribute spec recorded for one type name."""

    type: str
    name: str
    attribute: AttributeSpec


def get_attributes_from_extensions(
    extensions: Sequence[Extendable],
    *,
    storages: Optional[Mapping[str, Any]] = None,
    editor: Any = None,
    defaults: Optional[Mapping[str, Any]] = None,
) -> List[ExtensionAttribute]:
    """Collect global then local attribute records in registration order."""
    storages = storages or {}
    split = split_extensions(extensions)
    records: List[ExtensionAttribute] = []

    for extension in extensions:
        context = extension.make_context(
            storage=storages.get(extension.name),
            editor=editor,
            extensions=split.structural,
        )
        contributions = extension.resolve_field("add_global_attributes", context) or []

        for contribution in contributions:
            types = contribution.get("types") or []
            attributes = contribution.get("attributes") or {}
            for type_name in types:
                for name, raw in attributes.items():
                    spec = AttributeSpec.from_mapping(raw, defaults=defaults, owner=extension.name)
                    records.append(ExtensionAttribute(type=type_name, name=name, attribute=spec))

    for extension in split.structural:
        context = extension.make_context(storage=storages.get(extension.name), editor=editor)
        attributes = extension.resolve_field("add_attributes", context) or {}

        for name, raw in attributes.items():
            spec = AttributeSpec.from_mapping(raw, defaults=defaults, owner=extension.name)
            records.append(ExtensionAttribute(type=extension.name, name=name, attribute=spec))

    logger.debug("Collected %d attribute records", len(records))
    return records


def build_attribute_table(records: Iterable[ExtensionAttribute]) -> Dict[str, Dict[str, AttributeSpec]]:
    """Fold attribute records into ``{type: {attribute: spec}}``, last record wins."""
    table: Dict[str, Dict[str, AttributeSpec]] = {}
    for record in records:
        table.setdefault(record.type, {})[record.name] = record.attribute
    return table


def get_splitted_attributes(
    records: Iterable[ExtensionAttribute],
    type_name: str,
    attrs: Mapping[str, Any],
) -> Dict[str, Any]:
    """Keep only the values whose attribute survives a node/mark split."""
    specs = build_attribute_table(records).get(type_name, {})
    return {
        name: value
        for name, value in attrs.items()
        if name in specs and specs[name].keep_on_split
    }


__all__ = [
    "AttributeSpec",
    "ExtensionAttribute",
    "NO_DEFAULT",
    "build_attribute_table",
    "get_attributes_from_extensions",
    "get_splitted_attributes",
]

"""Type definitions assembled from structural extensions.

Each type name has exactly one owning extension. Its structural fields
(content expression, groups, flags, serialization hooks) are taken from that
extension alone; ``extend_node_schema`` / ``extend_mark_schema`` contributions
from any extension only add fields the owner does not define itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from folio.core.exceptions import ExtensionConfigError
from folio.core.extensions import (
    MARK_SCHEMA_FIELDS,
    NODE_SCHEMA_FIELDS,
    Extendable,
    ExtensionKind,
)
from folio.core.resolution import split_extensions
from folio.core.utils.profiling import span

from .attributes import (
    AttributeSpec,
    ExtensionAttribute,
    build_attribute_table,
    get_attributes_from_extensions,
    get_splitted_attributes,
)
from .nodes import DocumentMark, DocumentNode, compute_attributes, get_rendered_attributes
from .parse import inject_extension_attributes_to_parse_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeDefinition:
    """The resolved definition of one node or mark type."""

    name: str
    kind: ExtensionKind
    extension: Extendable
    attributes: Mapping[str, AttributeSpec]
    spec: Mapping[str, Any]
    parse_rules: Tuple[Mapping[str, Any], ...] = ()
    render_html: Optional[Callable[..., Any]] = None
    render_text: Optional[Callable[..., Any]] = None

    @property
    def is_node(self) -> bool:
        return self.kind is ExtensionKind.NODE

    @property
    def is_mark(self) -> bool:
        return self.kind is ExtensionKind.MARK

    def compute_attributes(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return compute_attributes(self.name, self.attributes, values)

    def create(
        self,
        attrs: Optional[Mapping[str, Any]] = None,
        content: Sequence[DocumentNode] = (),
        marks: Sequence[DocumentMark] = (),
        text: Optional[str] = None,
    ) -> Any:
        """Create a node (or mark) instance of this type.

        Raises:
            RequiredAttributeError: a required attribute has no value.
            AttributeValidationError: a supplied value was rejected.
        """
        computed = MappingProxyType(self.compute_attributes(attrs))
        if self.is_mark:
            return DocumentMark(type=self.name, attrs=computed)
        return DocumentNode(
            type=self.name,
            attrs=computed,
            content=tuple(content),
            marks=tuple(marks),
            text=text,
        )

    def rendered_attributes(self, instance: Any) -> Dict[str, Any]:
        return get_rendered_attributes(instance.attrs, self.attributes)

    def render(self, instance: Any) -> Any:
        """Call the owner's ``render_html(ctx, instance, html_attributes)``."""
        if self.render_html is None:
            return None
        return self.render_html(instance, self.rendered_attributes(instance))

    def text(self, instance: Any) -> Optional[str]:
        if self.render_text is None:
            return None
        return self.render_text(instance)


@dataclass(frozen=True)
class DocumentSchema:
    """Node and mark type tables produced by one resolution pass."""

    nodes: Mapping[str, TypeDefinition]
    marks: Mapping[str, TypeDefinition]
    top_node: Optional[str]
    attributes: Tuple[ExtensionAttribute, ...] = ()
    splittable_marks: Tuple[str, ...] = ()

    def get_type(self, name: str) -> Optional[TypeDefinition]:
        """Look up a node or mark type by name (nodes first)."""
        return self.nodes.get(name) or self.marks.get(name)

    def attribute_table(self) -> Dict[str, Dict[str, AttributeSpec]]:
        return build_attribute_table(self.attributes)

    def get_splitted_attributes(self, type_name: str, attrs: Mapping[str, Any]) -> Dict[str, Any]:
        return get_splitted_attributes(self.attributes, type_name, attrs)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary (callables are reported by presence only)."""

        def describe(definition: TypeDefinition) -> Dict[str, Any]:
            return {
                "extension": definition.extension.name,
                "spec": {k: v for k, v in definition.spec.items() if not callable(v)},
                "attributes": {
                    name: {
                        "default": None if not spec.has_default else spec.default,
                        "required": spec.is_required,
                        "rendered": spec.rendered,
                        "keep_on_split": spec.keep_on_split,
                    }
                    for name, spec in definition.attributes.items()
                },
                "parse_rules": len(definition.parse_rules),
            }

        return {
            "top_node": self.top_node,
            "nodes": {name: describe(d) for name, d in self.nodes.items()},
            "marks": {name: describe(d) for name, d in self.marks.items()},
            "splittable_marks": list(self.splittable_marks),
        }


class SchemaBuilder:
    """Builds a ``DocumentSchema`` from a sorted extension list."""

    def __init__(
        self,
        extensions: Sequence[Extendable],
        *,
        storages: Optional[Mapping[str, Any]] = None,
        editor: Any = None,
        attribute_defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.extensions: Tuple[Extendable, ...] = tuple(extensions)
        self.storages: Mapping[str, Any] = dict(storages or {})
        self.editor = editor
        self.attribute_defaults = dict(attribute_defaults or {})

    def _context(self, extension: Extendable):
        return extension.make_context(storage=self.storages.get(extension.name), editor=self.editor)

    def _schema_extras(self, hook_field: str, owner: Extendable) -> Dict[str, Any]:
        extras: Dict[str, Any] = {}
        for extension in self.extensions:
            hook = extension.get_field(hook_field, self._context(extension))
            if hook is None:
                continue
            contributed = hook(owner) or {}
            if not isinstance(contributed, Mapping):
                raise ExtensionConfigError(
                    f"{hook_field} of '{extension.name}' must return a mapping",
                    context={"extension": extension.name, "type": owner.name},
                )
            extras.update(contributed)
        return extras

    def _parse_rules(
        self,
        extension: Extendable,
        attributes: Mapping[str, AttributeSpec],
    ) -> Tuple[Mapping[str, Any], ...]:
        rules = extension.resolve_field("parse_html", self._context(extension)) or []
        return tuple(
            MappingProxyType(inject_extension_attributes_to_parse_rule(rule, attributes))
            for rule in rules
        )

    def _definition(
        self,
        extension: Extendable,
        fields: Sequence[str],
        hook_field: str,
        attributes: Mapping[str, AttributeSpec],
    ) -> TypeDefinition:
        context = self._context(extension)
        spec = self._schema_extras(hook_field, extension)
        for name in fields:
            value = extension.resolve_field(name, context)
            if value is not None:
                spec[name] = value

        return TypeDefinition(
            name=extension.name,
            kind=extension.kind,
            extension=extension,
            attributes=MappingProxyType(dict(attributes)),
            spec=MappingProxyType(spec),
            parse_rules=self._parse_rules(extension, attributes),
            render_html=extension.get_field("render_html", context),
            render_text=extension.get_field("render_text", context),
        )

    def build(self) -> DocumentSchema:
        split = split_extensions(self.extensions)

        with span("schema.attributes", count=len(self.extensions)):
            records = get_attributes_from_extensions(
                self.extensions,
                storages=self.storages,
                editor=self.editor,
                defaults=self.attribute_defaults,
            )
            table = build_attribute_table(records)

        nodes: Dict[str, TypeDefinition] = {}
        marks: Dict[str, TypeDefinition] = {}

        with span("schema.types", nodes=len(split.nodes), marks=len(split.marks)):
            for extension in split.nodes:
                if extension.name in nodes:
                    logger.debug("Node type '%s' redefined; later definition replaces it", extension.name)
                    del nodes[extension.name]
                nodes[extension.name] = self._definition(
                    extension, NODE_SCHEMA_FIELDS, "extend_node_schema", table.get(extension.name, {})
                )

            for extension in split.marks:
                if extension.name in marks:
                    logger.debug("Mark type '%s' redefined; later definition replaces it", extension.name)
                    del marks[extension.name]
                marks[extension.name] = self._definition(
                    extension, MARK_SCHEMA_FIELDS, "extend_mark_schema", table.get(extension.name, {})
                )

        return DocumentSchema(
            nodes=MappingProxyType(nodes),
            marks=MappingProxyType(marks),
            top_node=self._top_node(nodes),
            attributes=tuple(records),
            splittable_marks=self._splittable_marks(marks),
        )

    def _top_node(self, nodes: Mapping[str, TypeDefinition]) -> Optional[str]:
        candidates: List[str] = [
            name
            for name, definition in nodes.items()
            if definition.extension.resolve_field("top_node", self._context(definition.extension))
        ]
        if candidates:
            return candidates[0]
        return next(iter(nodes), None)

    def _splittable_marks(self, marks: Mapping[str, TypeDefinition]) -> Tuple[str, ...]:
        result: List[str] = []
        for name, definition in marks.items():
            keep = definition.extension.resolve_field("keep_on_split", self._context(definition.extension))
            if keep is None or keep:
                result.append(name)
        return tuple(result)


def build_schema(
    extensions: Sequence[Extendable],
    *,
    storages: Optional[Mapping[str, Any]] = None,
    editor: Any = None,
    attribute_defaults: Optional[Mapping[str, Any]] = None,
) -> DocumentSchema:
    return SchemaBuilder(
        extensions,
        storages=storages,
        editor=editor,
        attribute_defaults=attribute_defaults,
    ).build()


__all__ = ["DocumentSchema", "SchemaBuilder", "TypeDefinition", "build_schema"]

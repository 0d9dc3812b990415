"""Attribute aggregation and document type definitions."""
from __future__ import annotations

from .attributes import (
    NO_DEFAULT,
    AttributeSpec,
    ExtensionAttribute,
    build_attribute_table,
    get_attributes_from_extensions,
    get_splitted_attributes,
)
from .builder import DocumentSchema, SchemaBuilder, TypeDefinition, build_schema
from .nodes import DocumentMark, DocumentNode, compute_attributes, get_rendered_attributes
from .parse import inject_extension_attributes_to_parse_rule, read_element_attribute

__all__ = [
    "AttributeSpec",
    "DocumentMark",
    "DocumentNode",
    "DocumentSchema",
    "ExtensionAttribute",
    "NO_DEFAULT",
    "SchemaBuilder",
    "TypeDefinition",
    "build_attribute_table",
    "build_schema",
    "compute_attributes",
    "get_attributes_from_extensions",
    "get_rendered_attributes",
    "get_splitted_attributes",
    "inject_extension_attributes_to_parse_rule",
    "read_element_attribute",
]

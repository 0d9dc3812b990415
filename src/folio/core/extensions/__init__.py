"""Extension descriptors, override chains and field contexts."""
from __future__ import annotations

from .context import ExtensionContext
from .extendable import (
    Extendable,
    Extension,
    ExtensionKind,
    Mark,
    Node,
    is_extension_rules_enabled,
)
from .fields import LIFECYCLE_FIELDS, MARK_SCHEMA_FIELDS, NODE_SCHEMA_FIELDS

__all__ = [
    "Extendable",
    "Extension",
    "ExtensionContext",
    "ExtensionKind",
    "LIFECYCLE_FIELDS",
    "MARK_SCHEMA_FIELDS",
    "Mark",
    "NODE_SCHEMA_FIELDS",
    "Node",
    "is_extension_rules_enabled",
]

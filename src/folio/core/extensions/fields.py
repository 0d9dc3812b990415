"""Field names recognized by the resolution pipeline."""
from __future__ import annotations

from typing import Dict, Tuple

# Schema fields copied onto node type definitions.
NODE_SCHEMA_FIELDS: Tuple[str, ...] = (
    "content",
    "marks",
    "group",
    "inline",
    "atom",
    "selectable",
    "draggable",
    "code",
    "whitespace",
    "defining",
    "isolating",
)

# Schema fields copied onto mark type definitions.
MARK_SCHEMA_FIELDS: Tuple[str, ...] = (
    "inclusive",
    "excludes",
    "group",
    "spanning",
    "code",
)

# Lifecycle event name -> hook field name.
LIFECYCLE_FIELDS: Dict[str, str] = {
    "before_create": "on_before_create",
    "create": "on_create",
    "update": "on_update",
    "selection_update": "on_selection_update",
    "transaction": "on_transaction",
    "focus": "on_focus",
    "blur": "on_blur",
    "destroy": "on_destroy",
}

__all__ = ["LIFECYCLE_FIELDS", "MARK_SCHEMA_FIELDS", "NODE_SCHEMA_FIELDS"]

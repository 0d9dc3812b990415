"""The immutable product of one resolution pass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from folio.core.commands import CommandRegistry
from folio.core.extensions import Extendable
from folio.core.keyboard import ShortcutTable
from folio.core.lifecycle import LifecycleTable
from folio.core.resolution import SplitExtensions
from folio.core.schema import AttributeSpec, DocumentSchema, TypeDefinition


@dataclass(frozen=True)
class ResolvedDocument:
    """Sorted extensions plus every merged table derived from them.

    Never patched in place: reconfiguration builds a new one.
    """

    extensions: Tuple[Extendable, ...]
    split: SplitExtensions
    storage: Mapping[str, Any]
    schema: DocumentSchema
    commands: CommandRegistry
    shortcuts: ShortcutTable
    lifecycle: LifecycleTable

    @property
    def names(self) -> List[str]:
        return [extension.name for extension in self.extensions]

    @property
    def top_node(self) -> Optional[str]:
        return self.schema.top_node

    @property
    def splittable_marks(self) -> Tuple[str, ...]:
        return self.schema.splittable_marks

    def attribute_table(self) -> Dict[str, Dict[str, AttributeSpec]]:
        return self.schema.attribute_table()

    def get_type(self, name: str) -> Optional[TypeDefinition]:
        return self.schema.get_type(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "extensions": [
                {"name": ext.name, "kind": ext.kind.value, "priority": ext.priority()}
                for ext in self.extensions
            ],
            "schema": self.schema.to_dict(),
            "commands": {
                name: command.extension for name, command in self.commands.as_mapping().items()
            },
            "shortcuts": {
                key: shortcut.extension for key, shortcut in self.shortcuts.as_mapping().items()
            },
            "lifecycle": self.lifecycle.to_dict(),
        }


__all__ = ["ResolvedDocument"]

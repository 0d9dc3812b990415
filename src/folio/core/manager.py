"""Extension manager: one resolution pass per extension list."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Optional, Sequence

from folio.core.commands import CommandRegistry
from folio.core.config import ConfigManager, ExtensionsConfig, KeyboardConfig
from folio.core.extensions import Extendable
from folio.core.keyboard import ShortcutTable
from folio.core.lifecycle import LifecycleTable
from folio.core.resolution import resolve_extensions, split_extensions
from folio.core.schema import build_schema
from folio.core.utils.profiling import span

from .resolved import ResolvedDocument

logger = logging.getLogger(__name__)


def resolve_document(
    extensions: Sequence[Extendable],
    editor: Any = None,
    config: Optional[ConfigManager] = None,
) -> ResolvedDocument:
    """Flatten, sort, split and aggregate ``extensions`` into a ResolvedDocument."""
    manager = config or ConfigManager()
    extensions_config = ExtensionsConfig(manager)
    keyboard_config = KeyboardConfig(manager)

    with span("resolve", count=len(extensions)):
        storages: Dict[str, Any] = {}
        ordered = resolve_extensions(extensions, extensions_config, storages=storages)
        split = split_extensions(ordered)

        # Storage already handed to add_extensions is kept for the whole pass.
        seeded = set(storages)
        for extension in ordered:
            if extension.name not in seeded:
                storages[extension.name] = extension.storage

        schema = build_schema(
            ordered,
            storages=storages,
            editor=editor,
            attribute_defaults=extensions_config.attribute_defaults,
        )

        with span("resolve.commands"):
            commands = CommandRegistry.from_extensions(ordered, storages=storages, editor=editor, schema=schema)
        with span("resolve.shortcuts"):
            shortcuts = ShortcutTable.from_extensions(
                ordered,
                storages=storages,
                editor=editor,
                schema=schema,
                mac=keyboard_config.is_mac,
            )
        with span("resolve.lifecycle"):
            lifecycle = LifecycleTable.from_extensions(ordered, storages=storages, editor=editor, schema=schema)

    logger.debug(
        "Resolved %d extensions: %d nodes, %d marks, %d commands",
        len(ordered),
        len(schema.nodes),
        len(schema.marks),
        len(commands),
    )
    return ResolvedDocument(
        extensions=ordered,
        split=split,
        storage=MappingProxyType(storages),
        schema=schema,
        commands=commands,
        shortcuts=shortcuts,
        lifecycle=lifecycle,
    )


class ExtensionManager:
    """Owns the current ResolvedDocument for one extension list.

    ``reconfigure()`` replaces the resolved document wholesale; callers that
    kept a reference to the previous one keep seeing the old tables.
    """

    def __init__(
        self,
        extensions: Sequence[Extendable],
        *,
        editor: Any = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        self.editor = editor
        self.config = config or ConfigManager()
        self._extensions = tuple(extensions)
        self._resolved = resolve_document(self._extensions, editor=editor, config=self.config)

    @property
    def resolved(self) -> ResolvedDocument:
        return self._resolved

    @property
    def extensions(self) -> Sequence[Extendable]:
        return self._resolved.extensions

    def reconfigure(self, extensions: Optional[Sequence[Extendable]] = None) -> ResolvedDocument:
        """Re-run resolution, optionally for a new root list."""
        if extensions is not None:
            self._extensions = tuple(extensions)
        self._resolved = resolve_document(self._extensions, editor=self.editor, config=self.config)
        return self._resolved


__all__ = ["ExtensionManager", "resolve_document"]

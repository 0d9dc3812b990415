"""Merged keyboard shortcut table."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from folio.core.exceptions import ExtensionConfigError
from folio.core.extensions import Extendable

from .keys import normalize_key_name

logger = logging.getLogger(__name__)

ShortcutHandler = Callable[[Any], bool]


@dataclass(frozen=True)
class Shortcut:
    key: str
    extension: str
    handler: ShortcutHandler


class ShortcutTable:
    """Normalized key -> handler, later registration wins on collisions.

    Handlers are called with the editor handle and return whether they
    consumed the key. Unbound keys report False so the host can fall back
    to its default behavior.
    """

    def __init__(self, shortcuts: Mapping[str, Shortcut], *, editor: Any = None, mac: bool = False) -> None:
        self._shortcuts = MappingProxyType(dict(shortcuts))
        self.editor = editor
        self.mac = mac

    @classmethod
    def from_extensions(
        cls,
        extensions: Sequence[Extendable],
        *,
        storages: Optional[Mapping[str, Any]] = None,
        editor: Any = None,
        schema: Any = None,
        mac: bool = False,
    ) -> "ShortcutTable":
        storages = storages or {}
        shortcuts: Dict[str, Shortcut] = {}

        for extension in extensions:
            context = extension.make_context(
                storage=storages.get(extension.name),
                editor=editor,
                type=schema.get_type(extension.name) if schema is not None else None,
            )
            contributed = extension.resolve_field("add_keyboard_shortcuts", context) or {}

            for raw_key, handler in contributed.items():
                key = normalize_key_name(raw_key, mac=mac)
                shortcuts[key] = Shortcut(key=key, extension=extension.name, handler=handler)

        return cls(shortcuts, editor=editor, mac=mac)

    def get(self, key: str) -> Optional[Shortcut]:
        try:
            normalized = normalize_key_name(key, mac=self.mac)
        except ExtensionConfigError:
            logger.debug("Ignoring unparsable key combination %r", key)
            return None
        return self._shortcuts.get(normalized)

    def keys(self) -> List[str]:
        return list(self._shortcuts)

    def as_mapping(self) -> Mapping[str, Shortcut]:
        return self._shortcuts

    def handle(self, key: str) -> bool:
        """Dispatch ``key``; True when a handler consumed it."""
        shortcut = self.get(key)
        if shortcut is None:
            return False
        try:
            return bool(shortcut.handler(self.editor))
        except Exception:
            logger.exception(
                "Shortcut '%s' of extension '%s' raised",
                shortcut.key,
                shortcut.extension,
            )
            return False

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._shortcuts)


__all__ = ["Shortcut", "ShortcutHandler", "ShortcutTable"]

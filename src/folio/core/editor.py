"""Minimal host shell around a resolved extension set.

The editor owns a ``DocumentView`` and forwards its own events (creation,
committed transactions, focus changes, key presses, destruction) to the
resolved lifecycle, command and shortcut tables. Rendering is out of scope.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from folio.core.commands import (
    CanCommands,
    ChainedCommands,
    CommandManager,
    DocumentState,
    DocumentView,
    SingleCommands,
    Transaction,
)
from folio.core.config import ConfigManager
from folio.core.extensions import Extendable
from folio.core.lifecycle import HookFailure, LifecycleDispatcher, LifecycleEvent
from folio.core.schema import DocumentSchema

from .manager import ExtensionManager
from .resolved import ResolvedDocument
from .styles import BASE_CSS, BASE_STYLE_ID, StyleRegistry

logger = logging.getLogger(__name__)


class Editor:
    def __init__(
        self,
        extensions: Sequence[Extendable] = (),
        *,
        content: Optional[Mapping[str, Any]] = None,
        config: Optional[ConfigManager] = None,
        styles: Optional[StyleRegistry] = None,
        inject_css: bool = True,
        inject_nonce: Optional[str] = None,
    ) -> None:
        self.styles = styles if styles is not None else StyleRegistry()
        if inject_css:
            self.styles.register(BASE_STYLE_ID, BASE_CSS, nonce=inject_nonce)

        self.view = DocumentView(DocumentState(doc=dict(content or {})))
        self.is_focused = False
        self.is_destroyed = False

        self.extension_manager = ExtensionManager(extensions, editor=self, config=config)
        self._bind()
        self._unsubscribe = self.view.subscribe(self._on_transaction)

        self.emit(LifecycleEvent.BEFORE_CREATE)
        self.emit(LifecycleEvent.CREATE)

    def _bind(self) -> None:
        resolved = self.extension_manager.resolved
        self.command_manager = CommandManager(resolved.commands, view=self.view, editor=self)
        self._dispatcher = LifecycleDispatcher(resolved.lifecycle, editor=self)

    # =========================================================================
    # Resolved tables
    # =========================================================================

    @property
    def resolved(self) -> ResolvedDocument:
        return self.extension_manager.resolved

    @property
    def schema(self) -> DocumentSchema:
        return self.resolved.schema

    @property
    def storage(self) -> Mapping[str, Any]:
        return self.resolved.storage

    @property
    def state(self) -> DocumentState:
        return self.view.state

    def reconfigure(self, extensions: Optional[Sequence[Extendable]] = None) -> ResolvedDocument:
        """Resolve again and rebind commands and hooks to the new tables."""
        resolved = self.extension_manager.reconfigure(extensions)
        self._bind()
        return resolved

    # =========================================================================
    # Commands and keys
    # =========================================================================

    @property
    def commands(self) -> SingleCommands:
        return self.command_manager.commands

    def chain(self) -> ChainedCommands:
        return self.command_manager.chain()

    def can(self) -> CanCommands:
        return self.command_manager.can()

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press; False means the host should handle it."""
        if self.is_destroyed:
            return False
        return self.resolved.shortcuts.handle(key)

    # =========================================================================
    # Events
    # =========================================================================

    def emit(self, event: LifecycleEvent, **payload: Any) -> Tuple[HookFailure, ...]:
        return self._dispatcher.dispatch(event, **payload)

    def _on_transaction(self, tr: Transaction, state: DocumentState) -> None:
        self.emit(LifecycleEvent.TRANSACTION, transaction=tr)
        if tr.selection != tr.before.selection:
            self.emit(LifecycleEvent.SELECTION_UPDATE, transaction=tr)
        if tr.doc_changed:
            self.emit(LifecycleEvent.UPDATE, transaction=tr)

    def focus(self) -> None:
        if self.is_focused:
            return
        self.is_focused = True
        self.emit(LifecycleEvent.FOCUS)

    def blur(self) -> None:
        if not self.is_focused:
            return
        self.is_focused = False
        self.emit(LifecycleEvent.BLUR)

    def destroy(self) -> None:
        if self.is_destroyed:
            return
        self.emit(LifecycleEvent.DESTROY)
        self._unsubscribe()
        self.is_destroyed = True
        logger.debug("Editor destroyed")


__all__ = ["Editor"]

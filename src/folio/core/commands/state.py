"""Reference document state used as the scratch target of commands.

The real document engine is an external collaborator; this model only has to
support "mutate a scratch copy, then commit or discard it".
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One recorded mutation of a transaction."""

    op: str
    key: str
    value: Any = None


@dataclass(frozen=True)
class DocumentState:
    """Immutable snapshot of a document and its selection."""

    doc: Mapping[str, Any] = field(default_factory=dict)
    selection: Any = None

    @property
    def tr(self) -> "Transaction":
        """A fresh scratch transaction starting from this state."""
        return Transaction(self)

    def apply(self, tr: "Transaction") -> "DocumentState":
        return DocumentState(doc=MappingProxyType(copy.deepcopy(tr.doc)), selection=tr.selection)


class Transaction:
    """Scratch copy of a state that accumulates steps until committed."""

    def __init__(self, state: DocumentState) -> None:
        self.before = state
        self.doc: Dict[str, Any] = copy.deepcopy(dict(state.doc))
        self.selection = state.selection
        self.steps: List[Step] = []
        self._meta: Dict[str, Any] = {}

    @property
    def doc_changed(self) -> bool:
        return any(step.op != "selection" for step in self.steps)

    @property
    def state(self) -> DocumentState:
        """Read-only view of the state as this transaction currently sees it."""
        return DocumentState(doc=MappingProxyType(self.doc), selection=self.selection)

    def set(self, key: str, value: Any) -> "Transaction":
        self.doc[key] = value
        self.steps.append(Step("set", key, value))
        return self

    def delete(self, key: str) -> "Transaction":
        if key in self.doc:
            del self.doc[key]
            self.steps.append(Step("delete", key))
        return self

    def set_selection(self, selection: Any) -> "Transaction":
        self.selection = selection
        self.steps.append(Step("selection", "", selection))
        return self

    def set_meta(self, key: str, value: Any) -> "Transaction":
        self._meta[key] = value
        return self

    def get_meta(self, key: str, default: Any = None) -> Any:
        return self._meta.get(key, default)


Listener = Callable[[Transaction, DocumentState], None]


class DocumentView:
    """Holds the current state and commits transactions to it."""

    def __init__(self, state: Optional[DocumentState] = None) -> None:
        self.state = state or DocumentState()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, tr: Transaction) -> DocumentState:
        self.state = self.state.apply(tr)
        logger.debug("Committed transaction with %d steps", len(tr.steps))
        for listener in tuple(self._listeners):
            listener(tr, self.state)
        return self.state

    @property
    def listeners(self) -> Tuple[Listener, ...]:
        return tuple(self._listeners)


__all__ = ["DocumentState", "DocumentView", "Step", "Transaction"]

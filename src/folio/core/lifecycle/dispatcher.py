"""Lifecycle hook table and dispatch.

Hooks are fire-and-forget: ``hook(ctx, payload)`` where ``payload`` is a
dict carrying at least ``editor``. A raising hook is logged under its
extension's name and never stops the remaining hooks.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from folio.core.extensions import LIFECYCLE_FIELDS, Extendable

logger = logging.getLogger(__name__)


class LifecycleEvent(str, Enum):
    BEFORE_CREATE = "before_create"
    CREATE = "create"
    UPDATE = "update"
    SELECTION_UPDATE = "selection_update"
    TRANSACTION = "transaction"
    FOCUS = "focus"
    BLUR = "blur"
    DESTROY = "destroy"

    @property
    def field(self) -> str:
        return LIFECYCLE_FIELDS[self.value]


@dataclass(frozen=True)
class LifecycleHook:
    extension: str
    event: LifecycleEvent
    func: Callable[[Dict[str, Any]], Any]


@dataclass(frozen=True)
class HookFailure:
    extension: str
    event: LifecycleEvent
    error: BaseException


class LifecycleTable:
    """Per-event hooks in resolution order."""

    def __init__(self, hooks: Mapping[LifecycleEvent, Sequence[LifecycleHook]]) -> None:
        self._hooks = MappingProxyType({event: tuple(hooks.get(event, ())) for event in LifecycleEvent})

    @classmethod
    def from_extensions(
        cls,
        extensions: Sequence[Extendable],
        *,
        storages: Optional[Mapping[str, Any]] = None,
        editor: Any = None,
        schema: Any = None,
    ) -> "LifecycleTable":
        storages = storages or {}
        hooks: Dict[LifecycleEvent, List[LifecycleHook]] = {event: [] for event in LifecycleEvent}

        for extension in extensions:
            context = extension.make_context(
                storage=storages.get(extension.name),
                editor=editor,
                type=schema.get_type(extension.name) if schema is not None else None,
            )
            for event in LifecycleEvent:
                func = extension.get_field(event.field, context)
                if func is None:
                    continue
                if not callable(func):
                    logger.warning("Ignoring non-callable %s on '%s'", event.field, extension.name)
                    continue
                hooks[event].append(LifecycleHook(extension=extension.name, event=event, func=func))

        return cls(hooks)

    def hooks(self, event: Union[LifecycleEvent, str]) -> Tuple[LifecycleHook, ...]:
        return self._hooks[LifecycleEvent(event)]

    def to_dict(self) -> Dict[str, List[str]]:
        return {event.value: [hook.extension for hook in hooks] for event, hooks in self._hooks.items()}


class LifecycleDispatcher:
    def __init__(self, table: LifecycleTable, *, editor: Any = None) -> None:
        self.table = table
        self.editor = editor

    def dispatch(self, event: Union[LifecycleEvent, str], **payload: Any) -> Tuple[HookFailure, ...]:
        """Invoke every hook for ``event``; return the failures, if any."""
        event = LifecycleEvent(event)
        payload.setdefault("editor", self.editor)
        failures: List[HookFailure] = []

        for hook in self.table.hooks(event):
            try:
                hook.func(dict(payload))
            except Exception as exc:
                logger.exception("Hook %s of extension '%s' raised", event.field, hook.extension)
                failures.append(HookFailure(extension=hook.extension, event=event, error=exc))

        return tuple(failures)


__all__ = ["HookFailure", "LifecycleDispatcher", "LifecycleEvent", "LifecycleHook", "LifecycleTable"]

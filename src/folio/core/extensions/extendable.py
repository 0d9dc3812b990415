"""Extension descriptors and their override chain.

An extension is a record of fields (options factory, commands, attributes,
schema fields, hooks ...). ``extend()`` produces a new generation whose
``parent`` points at the receiver; fields it does not define fall through to
the parent. A field function reaches the previous generation's contribution
explicitly through ``ctx.parent()`` instead of an implicit super call:

    CustomBold = Bold.extend(
        add_keyboard_shortcuts=lambda ctx: {
            **(ctx.parent() or {}),
            "Mod-b": toggle_bold_differently,
        },
    )

``configure()`` does not add a generation: it replaces the current one with a
copy whose options factory deep-merges the given options over the prior ones.
"""
from __future__ import annotations

import functools
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, Iterator, Mapping, Optional, Sequence, Union

from folio.core.exceptions import ExtensionConfigError
from folio.core.utils.attributes import call_or_return
from folio.core.utils.merge import deep_merge

from .context import ExtensionContext

ConfigInput = Union[Mapping[str, Any], Callable[[], Mapping[str, Any]], None]


class ExtensionKind(str, Enum):
    """What an extension contributes to the document schema."""

    EXTENSION = "extension"
    NODE = "node"
    MARK = "mark"

    @property
    def is_structural(self) -> bool:
        return self is not ExtensionKind.EXTENSION


def _read_config(config: ConfigInput, fields: Mapping[str, Any]) -> Dict[str, Any]:
    resolved = call_or_return(config)
    if resolved is not None and not isinstance(resolved, Mapping):
        raise ExtensionConfigError(
            f"Extension config must be a mapping, got {type(resolved).__name__}",
        )
    merged: Dict[str, Any] = dict(resolved or {})
    merged.update(fields)
    return merged


def _parent_thunk(
    parent: Optional["Extendable"],
    field: str,
    context: ExtensionContext,
) -> Callable[..., Any]:
    def parent_contribution(*args: Any, **kwargs: Any) -> Any:
        if parent is None:
            return None
        value = parent.get_field(field, context)
        if callable(value):
            return value(*args, **kwargs)
        return value

    return parent_contribution


class Extendable:
    """One generation of an extension override chain.

    Instances are immutable: ``configure()`` and ``extend()`` always return
    new objects. The chain is singly linked through ``parent``.
    """

    kind: ClassVar[ExtensionKind] = ExtensionKind.EXTENSION

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        *,
        name: str,
        parent: Optional["Extendable"] = None,
    ) -> None:
        fields = dict(config or {})
        fields.pop("name", None)
        self._config: Mapping[str, Any] = MappingProxyType(fields)
        self._name = name
        self._parent = parent

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def create(cls, config: ConfigInput = None, **fields: Any) -> "Extendable":
        """Create a root generation (no parent).

        ``config`` may be a mapping or a zero-arg callable returning one;
        keyword fields are layered on top of it.
        """
        resolved = _read_config(config, fields)
        name = resolved.pop("name", None)
        if not isinstance(name, str) or not name.strip():
            raise ExtensionConfigError(
                f"{cls.__name__}.create() requires a non-empty 'name'",
                context={"kind": cls.kind.value},
            )
        return cls(resolved, name=name)

    def configure(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "Extendable":
        """Return a copy of this generation with ``options`` merged over its own.

        The name, the kind and the parent pointer are preserved.
        """
        partial = deep_merge(dict(options or {}), kwargs)
        previous = self

        def add_options(ctx: ExtensionContext) -> Dict[str, Any]:
            return deep_merge(previous.options, partial)

        fields = dict(self._config)
        fields["add_options"] = add_options
        return type(self)(fields, name=self._name, parent=self._parent)

    def extend(self, config: ConfigInput = None, **fields: Any) -> "Extendable":
        """Return a new generation whose parent is this one.

        Only the given fields are stored on the child; everything else falls
        through. The name defaults to this generation's name.
        """
        resolved = _read_config(config, fields)
        name = resolved.pop("name", None)
        if name is not None and (not isinstance(name, str) or not name.strip()):
            raise ExtensionConfigError("extend() received an empty 'name'", context={"parent": self._name})
        return type(self)(resolved, name=name or self._name, parent=self)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional["Extendable"]:
        return self._parent

    @property
    def config(self) -> Mapping[str, Any]:
        """Fields defined on this generation only."""
        return self._config

    def lineage(self) -> Iterator["Extendable"]:
        """Yield this generation followed by its ancestors."""
        node: Optional[Extendable] = self
        while node is not None:
            yield node
            node = node._parent

    def defines(self, field: str) -> bool:
        """Whether any generation in the chain defines ``field``."""
        return any(field in node._config for node in self.lineage())

    def get_field(self, field: str, context: Optional[ExtensionContext] = None) -> Any:
        """Return ``field`` resolved along the override chain.

        Static values are returned unchanged. Callable values are bound to
        ``context`` extended with a ``parent`` thunk for the same field one
        generation above the one that defined it. Absent fields yield None.
        """
        owner = next((node for node in self.lineage() if field in node._config), None)
        if owner is None:
            return None

        value = owner._config[field]
        if not callable(value):
            return value

        ctx = context if context is not None else ExtensionContext(name=self._name)
        bound = ctx.with_parent(_parent_thunk(owner._parent, field, ctx))
        return functools.partial(value, bound)

    def resolve_field(self, field: str, context: Optional[ExtensionContext] = None, *args: Any) -> Any:
        """Evaluate ``field``: call it with ``args`` if callable, else return it."""
        return call_or_return(self.get_field(field, context), *args)

    @property
    def options(self) -> Dict[str, Any]:
        value = self.resolve_field("add_options", ExtensionContext(name=self._name))
        return dict(value or {})

    @property
    def storage(self) -> Any:
        """A fresh storage object produced by ``add_storage``.

        Each access creates new state; the extension manager creates it once
        per resolution pass and hands the same object to every context.
        """
        value = self.resolve_field(
            "add_storage",
            ExtensionContext(name=self._name, options=self.options),
        )
        if value is None:
            return {}
        if isinstance(value, dict):
            return dict(value)
        return value

    def make_context(
        self,
        *,
        storage: Any = None,
        editor: Any = None,
        type: Any = None,
        extensions: Sequence["Extendable"] = (),
    ) -> ExtensionContext:
        """Build the context handed to this extension's field functions."""
        return ExtensionContext(
            name=self._name,
            options=self.options,
            storage=storage,
            editor=editor,
            type=type,
            extensions=tuple(extensions),
        )

    def priority(self, default: int = 100) -> int:
        value = self.get_field("priority")
        return int(value) if value else default

    def __repr__(self) -> str:
        depth = sum(1 for _ in self.lineage())
        return f"<{type(self).__name__} name={self._name!r} generation={depth}>"


class Extension(Extendable):
    """Behavior-only extension (commands, shortcuts, hooks, global attributes)."""

    kind = ExtensionKind.EXTENSION


class Node(Extendable):
    """Structural extension declaring a node type."""

    kind = ExtensionKind.NODE


class Mark(Extendable):
    """Structural extension declaring a mark type."""

    kind = ExtensionKind.MARK


def is_extension_rules_enabled(
    extension: Extendable,
    enabled: Union[bool, Sequence[Union[str, Extendable]]],
) -> bool:
    """Check whether input/paste rules of ``extension`` are enabled.

    ``enabled`` is either a flag for all extensions or a list of extension
    names (or extensions) whose rules stay on.
    """
    if isinstance(enabled, bool):
        return enabled
    names = {item if isinstance(item, str) else item.name for item in enabled}
    return extension.name in names


__all__ = [
    "Extendable",
    "Extension",
    "ExtensionKind",
    "Mark",
    "Node",
    "is_extension_rules_enabled",
]

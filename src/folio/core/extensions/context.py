"""Explicit context handed to every extension field function.

Field functions never rely on an implicit receiver. Each one takes a single
``ExtensionContext`` as its first positional argument; ``ctx.parent`` is a
thunk that evaluates the same field one generation up the override chain.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Tuple


def _no_parent(*args: Any, **kwargs: Any) -> None:
    return None


@dataclass(frozen=True)
class ExtensionContext:
    """Context for one field evaluation.

    Attributes:
        name: Name of the extension whose field is being evaluated
        options: Resolved options of that extension
        storage: Extension-local runtime state created at resolution time
        editor: Host editor handle (None while the schema is being built)
        type: Resolved type definition for structural extensions
        extensions: Structural extensions, for global attribute contributions
        parent: Thunk returning the parent generation's contribution (None at the root)
    """

    name: str
    options: Mapping[str, Any] = field(default_factory=dict)
    storage: Any = None
    editor: Any = None
    type: Any = None
    extensions: Tuple[Any, ...] = ()
    parent: Callable[..., Any] = _no_parent

    def with_parent(self, parent: Callable[..., Any]) -> "ExtensionContext":
        return replace(self, parent=parent)


__all__ = ["ExtensionContext"]

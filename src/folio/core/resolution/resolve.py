"""Flatten + sort entry point with duplicate-name diagnostics."""
from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from folio.core.config import ExtensionsConfig
from folio.core.extensions import Extendable
from folio.core.utils.profiling import span

from .flatten import flatten_extensions
from .sort import sort_extensions

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def find_duplicates(items: Iterable[T]) -> List[T]:
    """Return values occurring more than once, in order of first repetition.

    Example:
        >>> find_duplicates(["bold", "italic", "bold", "code", "italic", "bold"])
        ['bold', 'italic']
    """
    seen = set()
    duplicates: List[T] = []
    for item in items:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


def resolve_extensions(
    extensions: Sequence[Extendable],
    config: Optional[ExtensionsConfig] = None,
    storages: Optional[Dict[str, Any]] = None,
) -> Tuple[Extendable, ...]:
    """Flatten and sort ``extensions`` into the resolution order.

    Duplicate names are reported but kept: every per-key merge downstream
    lets the later registration win. ``storages`` is handed to
    :func:`flatten_extensions`.
    """
    cfg = config or ExtensionsConfig(config={})

    with span("resolution.flatten", count=len(extensions)):
        flat = flatten_extensions(extensions, max_depth=cfg.max_nesting_depth, storages=storages)

    with span("resolution.sort", count=len(flat)):
        ordered = sort_extensions(flat, default_priority=cfg.default_priority)

    if cfg.warn_on_duplicate_names:
        duplicates = find_duplicates(ext.name for ext in ordered)
        if duplicates:
            logger.warning(
                "Duplicate extension names found: %s. This can lead to issues.",
                ", ".join(repr(name) for name in duplicates),
            )

    return tuple(ordered)


__all__ = ["find_duplicates", "resolve_extensions"]

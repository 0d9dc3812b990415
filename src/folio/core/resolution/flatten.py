"""Depth-first expansion of nested extension lists."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from folio.core.exceptions import ExtensionConfigError, ExtensionResolutionError
from folio.core.extensions import Extendable

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


def _nested(extension: Extendable, storages: Optional[Dict[str, Any]]) -> List[Extendable]:
    if not extension.defines("add_extensions"):
        return []
    if storages is None:
        storage = extension.storage
    else:
        if extension.name not in storages:
            storages[extension.name] = extension.storage
        storage = storages[extension.name]
    context = extension.make_context(storage=storage)
    nested = extension.resolve_field("add_extensions", context)
    if not nested:
        return []
    items = list(nested)
    for item in items:
        if not isinstance(item, Extendable):
            raise ExtensionConfigError(
                f"Extension '{extension.name}' returned a non-extension from add_extensions: {item!r}",
                context={"extension": extension.name},
            )
    return items


def flatten_extensions(
    extensions: Iterable[Extendable],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    storages: Optional[Dict[str, Any]] = None,
) -> List[Extendable]:
    """Expand ``extensions`` in pre-order.

    Each extension is emitted, then the extensions it contributes through
    ``add_extensions`` are flattened and spliced right after it.

    ``add_extensions`` sees the storage kept in ``storages`` under the
    extension's name, created there on first use. Without ``storages`` it
    gets a fresh storage that is discarded afterwards.

    Raises:
        ExtensionResolutionError: nesting deeper than ``max_depth``. The error
            carries the chain of extension names leading to the cutoff.
    """
    result: List[Extendable] = []

    def visit(items: Sequence[Extendable], path: List[str]) -> None:
        for extension in items:
            chain = [*path, extension.name]
            result.append(extension)
            nested = _nested(extension, storages)
            if not nested:
                continue
            if len(chain) > max_depth:
                raise ExtensionResolutionError(
                    f"Nested extensions exceed max depth {max_depth}: {' > '.join(chain)}",
                    chain=chain,
                    context={"max_depth": max_depth},
                )
            visit(nested, chain)

    visit(list(extensions), [])
    logger.debug("Flattened %d extensions", len(result))
    return result


__all__ = ["DEFAULT_MAX_DEPTH", "flatten_extensions"]

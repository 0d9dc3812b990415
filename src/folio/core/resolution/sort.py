"""Priority ordering of flattened extensions."""
from __future__ import annotations

from typing import Iterable, List

from folio.core.extensions import Extendable

DEFAULT_PRIORITY = 100


def sort_extensions(
    extensions: Iterable[Extendable],
    *,
    default_priority: int = DEFAULT_PRIORITY,
) -> List[Extendable]:
    """Sort by descending priority; equal priorities keep their input order.

    An unset or zero priority counts as ``default_priority``.
    """
    return sorted(extensions, key=lambda ext: -ext.priority(default_priority))


__all__ = ["DEFAULT_PRIORITY", "sort_extensions"]

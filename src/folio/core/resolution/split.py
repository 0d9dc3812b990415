"""Partition of a sorted extension list by kind."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from folio.core.extensions import Extendable, ExtensionKind


@dataclass(frozen=True)
class SplitExtensions:
    """Order-preserving views over one sorted extension list."""

    base: Tuple[Extendable, ...]
    nodes: Tuple[Extendable, ...]
    marks: Tuple[Extendable, ...]

    @property
    def structural(self) -> Tuple[Extendable, ...]:
        """Node extensions followed by mark extensions."""
        return self.nodes + self.marks


def split_extensions(extensions: Iterable[Extendable]) -> SplitExtensions:
    items = list(extensions)
    return SplitExtensions(
        base=tuple(e for e in items if e.kind is ExtensionKind.EXTENSION),
        nodes=tuple(e for e in items if e.kind is ExtensionKind.NODE),
        marks=tuple(e for e in items if e.kind is ExtensionKind.MARK),
    )


__all__ = ["SplitExtensions", "split_extensions"]

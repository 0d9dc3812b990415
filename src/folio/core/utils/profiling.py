"""Timing spans for resolution passes and CLI commands.

``span()`` is a no-op unless ``enable_profiler()`` installed a Profiler in the
current context. Each finished span is recorded with the names of the spans
enclosing it, so ``resolve > schema.types`` and a bare ``schema.types`` stay
distinguishable in the report.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional, Tuple

_PROFILER: ContextVar[Optional["Profiler"]] = ContextVar("folio_profiler", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    parents: Tuple[str, ...]
    duration_ms: float
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return " > ".join((*self.parents, self.name))


class Profiler:
    """Records finished spans in completion order."""

    def __init__(self) -> None:
        self._records: List[SpanRecord] = []
        self._stack: List[str] = []

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._records)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        parents = tuple(self._stack)
        self._stack.append(name)
        started = perf_counter()
        try:
            yield
        finally:
            self._stack.pop()
            elapsed = (perf_counter() - started) * 1000.0
            self._records.append(SpanRecord(name=name, parents=parents, duration_ms=elapsed, meta=dict(meta)))

    def to_dict(self) -> Dict[str, Any]:
        """Per-span records plus total milliseconds per span name."""
        totals: Dict[str, float] = {}
        for record in self._records:
            totals[record.name] = totals.get(record.name, 0.0) + record.duration_ms
        return {
            "spans": [
                {"path": record.path, "duration_ms": round(record.duration_ms, 3), "meta": record.meta}
                for record in self._records
            ],
            "totals_ms": totals,
        }


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[None]:
    token = _PROFILER.set(profiler)
    try:
        yield
    finally:
        _PROFILER.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _PROFILER.get()
    if profiler is None:
        yield
        return
    with profiler.span(name, **meta):
        yield


__all__ = ["Profiler", "SpanRecord", "enable_profiler", "span"]

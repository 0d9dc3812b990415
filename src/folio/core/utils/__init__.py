"""Shared helpers used across folio.core."""
from __future__ import annotations

from .attributes import call_or_return, from_string, merge_attributes
from .merge import deep_merge, is_plain_dict

__all__ = [
    "call_or_return",
    "deep_merge",
    "from_string",
    "is_plain_dict",
    "merge_attributes",
]

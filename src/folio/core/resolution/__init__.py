"""Flatten, sort and split extension lists."""
from __future__ import annotations

from .flatten import DEFAULT_MAX_DEPTH, flatten_extensions
from .resolve import find_duplicates, resolve_extensions
from .sort import DEFAULT_PRIORITY, sort_extensions
from .split import SplitExtensions, split_extensions

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_PRIORITY",
    "SplitExtensions",
    "find_duplicates",
    "flatten_extensions",
    "resolve_extensions",
    "sort_extensions",
    "split_extensions",
]

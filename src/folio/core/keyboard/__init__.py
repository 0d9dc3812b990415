"""Keyboard shortcut registration and dispatch."""
from __future__ import annotations

from .keys import normalize_key_name
from .shortcuts import Shortcut, ShortcutHandler, ShortcutTable

__all__ = ["Shortcut", "ShortcutHandler", "ShortcutTable", "normalize_key_name"]

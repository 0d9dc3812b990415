"""Typed accessors for individual config sections."""
from __future__ import annotations

from .extensions import ExtensionsConfig
from .keyboard import KeyboardConfig
from .logging import LoggingConfig

__all__ = ["ExtensionsConfig", "KeyboardConfig", "LoggingConfig"]

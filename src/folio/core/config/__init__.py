"""Configuration loading for folio.

Exposes the ConfigManager plus typed domain accessors.
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import ExtensionsConfig, KeyboardConfig, LoggingConfig
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "ExtensionsConfig",
    "KeyboardConfig",
    "LoggingConfig",
]

"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- One explicit ConfigManager (or an already merged dict) per accessor
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Any, Dict, Mapping, Optional

from .manager import ConfigManager


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("my_setting", "default")

        cfg = MyConfig(ConfigManager())
        print(cfg.my_setting)
    """

    def __init__(
        self,
        manager: Optional[ConfigManager] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize domain config.

        Args:
            manager: Config manager to read from. A default manager (bundled
                defaults plus environment) is created when omitted.
            config: Already merged configuration; takes precedence over ``manager``.
        """
        if config is not None:
            self._config: Mapping[str, Any] = config
        else:
            self._config = (manager or ConfigManager()).get_all()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict if missing)."""
        return dict(self._config.get(self._config_section(), {}) or {})


__all__ = ["BaseDomainConfig"]

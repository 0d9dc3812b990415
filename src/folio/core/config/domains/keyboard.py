"""Domain-specific configuration for keyboard shortcut handling."""
from __future__ import annotations

import sys
from functools import cached_property

from ..base import BaseDomainConfig


class KeyboardConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "keyboard"

    @cached_property
    def platform(self) -> str:
        return str(self.section.get("platform", "auto")).strip().lower()

    @cached_property
    def is_mac(self) -> bool:
        """Whether ``Mod`` resolves to Meta (mac) instead of Ctrl."""
        if self.platform == "mac":
            return True
        if self.platform == "other":
            return False
        return sys.platform == "darwin"

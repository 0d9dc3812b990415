"""Domain-specific configuration for folio logging."""

from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING")).upper()

    @cached_property
    def format(self) -> str:
        return str(self.section.get("format", "%(asctime)s %(levelname)s %(name)s: %(message)s"))

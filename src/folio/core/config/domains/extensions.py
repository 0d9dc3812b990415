"""Domain-specific configuration for extension resolution."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class ExtensionsConfig(BaseDomainConfig):
    """Resolution settings plus attribute default-filling values."""

    def _config_section(self) -> str:
        return "extensions"

    @cached_property
    def default_priority(self) -> int:
        return int(self.section.get("default_priority", 100))

    @cached_property
    def max_nesting_depth(self) -> int:
        return int(self.section.get("max_nesting_depth", 10))

    @cached_property
    def warn_on_duplicate_names(self) -> bool:
        return bool(self.section.get("warn_on_duplicate_names", True))

    @cached_property
    def attribute_defaults(self) -> Dict[str, Any]:
        """Defaults filled into attribute specs for omitted fields.

        ``attributes.defaults`` only carries the data-valued fields; ``default``,
        ``parse_html``, ``render_html`` and ``validate`` always default to None.
        """
        attrs = self._config.get("attributes") or {}
        defaults = attrs.get("defaults") or {}
        return {
            "rendered": bool(defaults.get("rendered", True)),
            "keep_on_split": bool(defaults.get("keep_on_split", True)),
            "is_required": bool(defaults.get("is_required", False)),
        }

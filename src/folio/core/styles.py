"""Explicit registry of injected style sheets.

Owned by one editor and handed to consumers through it; there is no
process-wide registry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

BASE_STYLE_ID = "core"

BASE_CSS = """\
.folio-editor {
  position: relative;
  word-wrap: break-word;
  white-space: pre-wrap;
}
.folio-editor [contenteditable="false"] {
  white-space: normal;
}
.folio-editor img.separator {
  display: inline !important;
  border: none !important;
  margin: 0 !important;
}
"""


@dataclass(frozen=True)
class StyleSheet:
    style_id: str
    css: str
    nonce: Optional[str] = None


class StyleRegistry:
    def __init__(self) -> None:
        self._sheets: Dict[str, StyleSheet] = {}

    def register(self, style_id: str, css: str, nonce: Optional[str] = None) -> StyleSheet:
        """Register ``css`` under ``style_id``; an existing id is kept as is."""
        existing = self._sheets.get(style_id)
        if existing is not None:
            return existing
        sheet = StyleSheet(style_id=style_id, css=css, nonce=nonce)
        self._sheets[style_id] = sheet
        logger.debug("Registered style sheet '%s'", style_id)
        return sheet

    def get(self, style_id: str) -> Optional[StyleSheet]:
        return self._sheets.get(style_id)

    def ids(self) -> List[str]:
        return list(self._sheets)

    def clear(self) -> None:
        self._sheets.clear()

    def __contains__(self, style_id: object) -> bool:
        return style_id in self._sheets

    def __len__(self) -> int:
        return len(self._sheets)


__all__ = ["BASE_CSS", "BASE_STYLE_ID", "StyleRegistry", "StyleSheet"]

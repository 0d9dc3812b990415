from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_FOLIO_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    *,
    level: str = "WARNING",
    fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Install one stream handler on the ``folio`` logger.

    Idempotent per-process: a previously installed folio handler is replaced,
    handlers installed by the host application are left alone.
    """
    global _FOLIO_HANDLER

    logger = logging.getLogger("folio")
    logger.setLevel(_level_from_name(level))

    if _FOLIO_HANDLER is not None:
        logger.removeHandler(_FOLIO_HANDLER)
        _FOLIO_HANDLER.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    _FOLIO_HANDLER = handler
    return handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the folio handler."""
    global _FOLIO_HANDLER
    if _FOLIO_HANDLER is not None:
        logging.getLogger("folio").removeHandler(_FOLIO_HANDLER)
        _FOLIO_HANDLER.close()
    _FOLIO_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests"]

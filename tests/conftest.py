from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator

import pytest
import yaml

from folio.core.config import ConfigManager
from folio.core.logging_setup import reset_logging_for_tests

TESTS_ROOT = Path(__file__).resolve().parent


@pytest.fixture(autouse=True)
def _isolate_folio_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FOLIO_* variables from the developer shell out of config loading."""
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key, raising=False)
    # Pin keyboard platform so `Mod` resolves the same way on every machine.
    monkeypatch.setenv("FOLIO_KEYBOARD__PLATFORM", "other")


@pytest.fixture(autouse=True)
def _reset_folio_logging() -> Iterator[None]:
    yield
    reset_logging_for_tests()


@pytest.fixture
def config_manager() -> ConfigManager:
    """Bundled defaults only (no env, no files)."""
    return ConfigManager(environ={"FOLIO_KEYBOARD__PLATFORM": "other"})


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, Dict[str, Any]], Path]:
    """Write a YAML config layer under tmp_path and return its path."""

    def _write(name: str, data: Dict[str, Any]) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write

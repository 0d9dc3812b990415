"""
Folio configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import jsonschema
import yaml

from folio.core.exceptions import ConfigValidationError
from folio.core.utils.merge import deep_merge as _deep_merge
from folio.core.utils.profiling import span
from folio.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "FOLIO_"


class ConfigManager:
    """Load, merge, and validate folio configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FOLIO_<SECTION>__<KEY>
    2. Explicit config files, in the order given (later files win)
    3. Bundled defaults: folio.data/config/*.yaml (alphabetical order)

    The merged result is validated against ``config.schema.yaml`` with
    jsonschema. A manager is an ordinary object: callers construct one and pass
    it to the components that need it; nothing is cached process-wide.
    """

    def __init__(
        self,
        config_files: Sequence[Path | str] = (),
        *,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        self.core_config_dir = get_data_path("config")
        self.schemas_dir = get_data_path("schemas")
        self.config_files: Tuple[Path, ...] = tuple(Path(p) for p in config_files)
        self._overrides = dict(overrides or {})
        self._environ = environ
        self._config: Optional[Dict[str, Any]] = None

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Config file must contain a YAML mapping: {path}",
                context={"path": str(path)},
            )
        return data

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            logger.warning("Ignoring malformed %s* key: %s%s", ENV_PREFIX, ENV_PREFIX, raw)
            return []
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        environ = os.environ if self._environ is None else self._environ
        for key in sorted(environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if not path:
                continue
            yield path, self._coerce_type(environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _iter_core_files(self) -> Iterable[Path]:
        return sorted(
            p for p in Path(self.core_config_dir).iterdir()
            if p.suffix in (".yaml", ".yml")
        )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all sources.

        Layers:
            1. Core config: folio.data/config/*.yaml (alphabetical order)
            2. Explicit config files (constructor order)
            3. Programmatic overrides
            4. Environment variable overrides (FOLIO_*)

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        with span("config.load_config.total", validate=validate):
            cfg: Dict[str, Any] = {}

            with span("config.load_config.core"):
                for path in self._iter_core_files():
                    cfg = self.deep_merge(cfg, self.load_yaml(path))

            with span("config.load_config.files", count=len(self.config_files)):
                for path in self.config_files:
                    if not path.exists():
                        raise FileNotFoundError(f"Config file not found: {path}")
                    cfg = self.deep_merge(cfg, self.load_yaml(path))

            cfg = self.deep_merge(cfg, self._overrides)

            with span("config.load_config.env"):
                self.apply_env_overrides(cfg)

            if validate:
                with span("config.load_config.validate"):
                    self.validate_schema(cfg)

            return cfg

    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.yaml") -> None:
        schema = self.load_yaml(Path(self.schemas_dir) / schema_name)
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigValidationError(
                f"Invalid configuration at '{location}': {exc.message}",
                context={"path": location, "schema": schema_name},
            ) from exc

    def get_all(self) -> Dict[str, Any]:
        """Return the merged configuration (loaded once per manager)."""
        if self._config is None:
            self._config = self.load_config(validate=True)
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-notation key (e.g. ``extensions.default_priority``)."""
        current: Any = self.get_all()
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current


__all__ = ["ConfigManager", "ENV_PREFIX"]

"""
Configuration management (YAML-only).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from config_plugins.data import get_data_path, read_yaml as read_bundled_yaml
from config_plugins.exceptions import ConfigError
from config_plugins.utils.merge import deep_merge as _deep_merge

logger = logging.getLogger(__name__)

PROJECT_CONFIG_DIRNAME = ".config-plugins"
ENV_PREFIX = "CONFIG_PLUGINS_"


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml`` / ``*.yml`` files in ``directory`` in alphabetical order."""
    if not directory.is_dir():
        return []
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml")]
    return sorted(files, key=lambda p: p.name)


class ConfigManager:
    """Load, merge, and validate configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CONFIG_PLUGINS_<section>__<key>
    2. Project config: <repo_root>/.config-plugins/config/*.yaml (alphabetical order)
    3. Bundled defaults: config_plugins.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"
        self.schemas_dir = get_data_path("schemas")

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Top level of {path} must be a mapping", context={"path": str(path)})
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.", context={"key": raw})
        return segs

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for part in path[:-1]:
            # Case-insensitive match so env keys can address camelCase YAML keys.
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part.lower(), part)
            nxt = cur.get(key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key] = nxt
            cur = nxt
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1].lower(), path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value in self._iter_env_overrides():
            logger.debug("Applying environment override %s", ".".join(path))
            self._set_nested(cfg, path, value)
        return cfg

    # ========== Loading ==========

    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.yaml") -> None:
        schema = read_bundled_yaml("schemas", schema_name)
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at '{location}': {exc.message}",
                context={"path": location},
            ) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the merged configuration (uncached).

        Use :func:`config_plugins.config.cache.get_cached_config` for cached access.
        """
        cfg: Dict[str, Any] = self._load_directory(self.core_config_dir, {})
        cfg = self._load_directory(self.project_config_dir, cfg)
        cfg = self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key (e.g. ``plugins.localDir``)."""
        from .cache import get_cached_config

        current: Any = get_cached_config(self.repo_root)
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current


__all__ = ["ConfigManager", "PROJECT_CONFIG_DIRNAME", "ENV_PREFIX", "iter_yaml_files"]

"""Centralized configuration caching.

All domain configs read through :func:`get_cached_config`. The cache key
includes the environment overrides and the project YAML fingerprints, so a
changed file or variable produces a fresh load.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    from .manager import ENV_PREFIX, PROJECT_CONFIG_DIRNAME, iter_yaml_files

    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for p in iter_yaml_files(repo_root / PROJECT_CONFIG_DIRNAME / "config"):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get the merged configuration for ``repo_root`` (cached).

    The returned dict is shared between callers and should be treated as
    read-only.
    """
    from .manager import ConfigManager

    root = _normalize_repo_root(repo_root)
    key = _cache_key(root)
    cached = _config_cache.get(key)
    if cached is None:
        cached = ConfigManager(repo_root=root).load_config(validate=validate)
        _config_cache[key] = cached
    return cached


def is_cached(repo_root: Optional[Path] = None) -> bool:
    root = _normalize_repo_root(repo_root)
    return _cache_key(root) in _config_cache


def clear_all_caches() -> None:
    """Clear the configuration cache (tests, long-running processes)."""
    _config_cache.clear()
    from config_plugins.data import clear_caches

    clear_caches()


__all__ = ["get_cached_config", "is_cached", "clear_all_caches"]

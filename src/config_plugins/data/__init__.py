"""
Bundled data resources (default configuration and schemas).

Accessed through importlib.resources so they work from an installed wheel.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("config", "plugins.yaml")
        PosixPath('/path/to/config_plugins/data/config/plugins.yaml')
    """
    pkg = resources.files("config_plugins.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> Any:
    """Read and parse a bundled YAML file (cached)."""
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def clear_caches() -> None:
    read_yaml.cache_clear()


__all__ = ["get_data_path", "read_yaml", "clear_caches"]

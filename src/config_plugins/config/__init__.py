"""Configuration system.

Usage:
    from config_plugins.config import ConfigManager, PluginsConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    # Domain-specific accessors (recommended)
    plugins = PluginsConfig(repo_root=Path("/path/to/project"))
    plugins.legacy_plugins
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import LoggingConfig, PluginsConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "PluginsConfig",
    "LoggingConfig",
]

"""Domain-specific configuration accessors.

Available domain configs:
- PluginsConfig: optional-capability pools and plugin lookup settings
- LoggingConfig: stdlib logging level, format and file

Usage:
    from config_plugins.config.domains import PluginsConfig

    plugins = PluginsConfig(repo_root=Path("/path/to/project"))
    pools = plugins.managed_versioned_plugins + plugins.legacy_plugins
"""
from __future__ import annotations

from .logging import LoggingConfig
from .plugins import PluginsConfig

__all__: list[str] = [
    "LoggingConfig",
    "PluginsConfig",
]

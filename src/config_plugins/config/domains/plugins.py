"""Domain-specific configuration for plugin resolution.

Provides the optional-capability pools used by the legacy pipeline and the
settings the default registry uses to find plugins by name.

Configuration is loaded from bundled config_plugins.data/config/plugins.yaml
with project overrides from .config-plugins/config/*.yaml merged on top.
"""
from __future__ import annotations

from functools import cached_property
from typing import Dict, List

from ..base import BaseDomainConfig

DEFAULT_ENTRY_POINT_GROUP = "config_plugins"
DEFAULT_MODULE_ATTRIBUTE = "config_plugin"


class PluginsConfig(BaseDomainConfig):
    """Typed access to the ``plugins`` section.

    Usage:
        plugins = PluginsConfig(repo_root=Path("/path/to/project"))
        plugins.legacy_plugins  # ["expo-app-auth", "expo-av", ...]
    """

    def _config_section(self) -> str:
        return "plugins"

    @cached_property
    def legacy_plugins(self) -> List[str]:
        return [str(p) for p in (self.section.get("legacy") or []) if p]

    @cached_property
    def managed_versioned_plugins(self) -> List[str]:
        return [str(p) for p in (self.section.get("managedVersioned") or []) if p]

    @cached_property
    def modules(self) -> Dict[str, str]:
        """Explicit import paths: plugin name -> ``"package.module:attribute"``."""
        modules = self.section.get("modules") or {}
        if isinstance(modules, dict):
            return {str(k): str(v) for k, v in modules.items()}
        return {}

    @cached_property
    def entry_point_group(self) -> str:
        return str(self.section.get("entryPointGroup") or DEFAULT_ENTRY_POINT_GROUP)

    @cached_property
    def local_dir(self) -> str:
        return str(self.section.get("localDir") or "")

    @cached_property
    def module_attribute(self) -> str:
        return str(self.section.get("moduleAttribute") or DEFAULT_MODULE_ATTRIBUTE)


__all__ = ["PluginsConfig", "DEFAULT_ENTRY_POINT_GROUP", "DEFAULT_MODULE_ATTRIBUTE"]

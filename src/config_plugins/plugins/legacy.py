"""Optional capabilities applied best-effort.

Names come from two config pools, ``plugins.managedVersioned`` and
``plugins.legacy``. Each name is applied once, if it resolves; a name that is
not installed, or cannot be loaded, is skipped without failing the run.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..config.domains import PluginsConfig
from ..pipeline import with_plugins
from ..registry import PluginRegistry
from ..static_plugin import StaticPlugin, static_plugin
from ..types import AppConfig, PipelineEntry, noop_plugin


def unique_plugin_names(*pools: Iterable[str]) -> List[str]:
    """Ordered union of ``pools``: first occurrence wins."""
    seen = set()
    out: List[str] = []
    for pool in pools:
        for name in pool:
            if name in seen:
                continue
            seen.add(name)
            out.append(name)
    return out


def get_legacy_plugins(plugins_config: Optional[PluginsConfig] = None) -> List[str]:
    cfg = plugins_config or PluginsConfig()
    return list(cfg.legacy_plugins)


def get_managed_versioned_plugins(plugins_config: Optional[PluginsConfig] = None) -> List[str]:
    cfg = plugins_config or PluginsConfig()
    return list(cfg.managed_versioned_plugins)


def optional_plugin_entries(
    plugins: Sequence[StaticPlugin], *, registry: Optional[PluginRegistry] = None
) -> List[PipelineEntry]:
    entries: List[PipelineEntry] = []
    for plugin in plugins:
        props = None
        if isinstance(plugin, tuple):
            plugin, props = plugin
        if not isinstance(plugin, str):
            entries.append(PipelineEntry.bare(plugin) if props is None else PipelineEntry.with_props(plugin, props))
            continue
        unit = static_plugin(plugin, fallback=noop_plugin, suppress_errors=True, registry=registry)
        entries.append(PipelineEntry.bare(unit) if props is None else PipelineEntry.with_props(unit, props))
    return entries


def with_optional_legacy_plugins(
    config: AppConfig,
    plugins: Sequence[StaticPlugin],
    *,
    registry: Optional[PluginRegistry] = None,
) -> AppConfig:
    """Apply ``plugins`` with resolution errors hidden and a no-op fallback."""
    return with_plugins(config, optional_plugin_entries(plugins, registry=registry))


def with_legacy_plugins(
    config: AppConfig,
    *,
    registry: Optional[PluginRegistry] = None,
    plugins_config: Optional[PluginsConfig] = None,
) -> AppConfig:
    cfg = plugins_config or PluginsConfig()
    names = unique_plugin_names(cfg.managed_versioned_plugins, cfg.legacy_plugins)
    return with_optional_legacy_plugins(config, names, registry=registry)


__all__ = [
    "unique_plugin_names",
    "get_legacy_plugins",
    "get_managed_versioned_plugins",
    "optional_plugin_entries",
    "with_optional_legacy_plugins",
    "with_legacy_plugins",
]

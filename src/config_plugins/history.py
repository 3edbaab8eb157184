"""Plugin history stored in ``config["_internal"]["pluginHistory"]``.

History lets a plugin run at most once per configuration: wrap it with
:func:`create_run_once_plugin` and a second application is skipped.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .types import AppConfig, ConfigPlugin, PluginUnit

logger = logging.getLogger(__name__)

UNVERSIONED = "UNVERSIONED"


def get_history_item(config: AppConfig, name: str) -> Optional[Dict[str, Any]]:
    internal = config.get("_internal") or {}
    history = internal.get("pluginHistory") or {}
    return history.get(name)


def add_history_item(config: AppConfig, name: str, version: Optional[str] = None) -> AppConfig:
    internal = config.setdefault("_internal", {})
    history = internal.setdefault("pluginHistory", {})
    history[name] = {"name": name, "version": version or UNVERSIONED}
    return config


def with_run_once(
    config: AppConfig,
    plugin: ConfigPlugin,
    name: str,
    version: Optional[str] = None,
    props: Any = None,
) -> AppConfig:
    """Apply ``plugin`` unless a plugin named ``name`` already ran on ``config``."""
    if get_history_item(config, name):
        logger.debug("Skipping plugin %s: already applied", name)
        return config
    # Record first so a re-entrant call cannot apply it twice.
    config = add_history_item(config, name, version)
    return plugin(config, props)


def create_run_once_plugin(plugin: ConfigPlugin, name: str, version: Optional[str] = None) -> PluginUnit:
    """Return a named plugin that applies ``plugin`` at most once per config."""

    def _run_once(config: AppConfig, props: Any = None) -> AppConfig:
        return with_run_once(config, plugin, name, version, props)

    return PluginUnit(name=name, fn=_run_once)


__all__ = [
    "UNVERSIONED",
    "get_history_item",
    "add_history_item",
    "with_run_once",
    "create_run_once_plugin",
]

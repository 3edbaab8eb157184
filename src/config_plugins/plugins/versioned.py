"""First-party SDK plugins applied for every project."""
from __future__ import annotations

from typing import List, Optional

from ..pipeline import with_plugins
from ..registry import PluginRegistry
from ..types import AppConfig, PipelineEntry
from ._ordering import required

UPDATES_PLUGIN = "expo-updates"

VERSIONED_SDK_PLUGINS = (
    "react-native-maps",
    "expo-ads-admob",
    "expo-apple-authentication",
    "expo-contacts",
    "expo-notifications",
    UPDATES_PLUGIN,
    "expo-branch",
    "expo-document-picker",
    "expo-facebook",
    "expo-splash-screen",
)


def versioned_sdk_plugin_entries(
    username: Optional[str], *, registry: Optional[PluginRegistry] = None
) -> List[PipelineEntry]:
    return [
        required(name, {"expoUsername": username}, registry=registry)
        if name == UPDATES_PLUGIN
        else required(name, registry=registry)
        for name in VERSIONED_SDK_PLUGINS
    ]


def with_versioned_sdk_plugins(
    config: AppConfig,
    username: Optional[str],
    *,
    registry: Optional[PluginRegistry] = None,
) -> AppConfig:
    """Apply the SDK plugins; ``username`` is passed to the updates plugin."""
    return with_plugins(config, versioned_sdk_plugin_entries(username, registry=registry))


__all__ = [
    "UPDATES_PLUGIN",
    "VERSIONED_SDK_PLUGINS",
    "versioned_sdk_plugin_entries",
    "with_versioned_sdk_plugins",
]

"""Default iOS pipeline."""
from __future__ import annotations

from typing import List, Optional

from ..pipeline import with_plugins
from ..registry import PluginRegistry
from ..types import AppConfig, PipelineEntry
from ._ordering import dangerous_entries, required, required_entries, seed_platform_field

BUNDLE_IDENTIFIER = "ios.bundle_identifier"

# Runs after the bundle identifier; several of these read it.
IOS_PLUGINS = (
    "ios.swift_bridging_header",
    "ios.noop_swift_file",
    "ios.google",
    "ios.display_name",
    "ios.orientation",
    "ios.requires_full_screen",
    "ios.scheme",
    "ios.user_interface_style",
    "ios.uses_non_exempt_encryption",
    "ios.build_number",
    "ios.version",
    "ios.google_services_file",
    # Entitlements
    "ios.associated_domains",
    # Xcode project
    "ios.device_family",
    "ios.locales",
)

# Most important first.
IOS_DANGEROUS_PLUGINS = ("ios.icons",)


def ios_plugin_entries(bundle_identifier: str, *, registry: Optional[PluginRegistry] = None) -> List[PipelineEntry]:
    return [
        required(BUNDLE_IDENTIFIER, {"bundleIdentifier": bundle_identifier}, registry=registry),
        *required_entries(IOS_PLUGINS, registry=registry),
        *dangerous_entries(IOS_DANGEROUS_PLUGINS, registry=registry),
    ]


def with_ios_plugins(
    config: AppConfig,
    bundle_identifier: str,
    *,
    registry: Optional[PluginRegistry] = None,
) -> AppConfig:
    """Apply every default iOS plugin.

    ``ios.bundleIdentifier`` is set before the pipeline starts so every plugin
    can rely on it.
    """
    config = seed_platform_field(config, "ios", "bundleIdentifier", bundle_identifier)
    return with_plugins(config, ios_plugin_entries(bundle_identifier, registry=registry))


__all__ = [
    "BUNDLE_IDENTIFIER",
    "IOS_PLUGINS",
    "IOS_DANGEROUS_PLUGINS",
    "ios_plugin_entries",
    "with_ios_plugins",
]

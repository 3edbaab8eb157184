"""Default Android pipeline."""
from __future__ import annotations

from typing import List, Optional

from ..pipeline import with_plugins
from ..registry import PluginRegistry
from ..types import AppConfig, PipelineEntry
from ._ordering import dangerous_entries, required, required_entries, seed_platform_field

ANDROID_PLUGINS = (
    # settings.gradle
    "android.name_settings_gradle",
    # project build.gradle
    "android.google_services_class_path",
    # app/build.gradle
    "android.google_services_apply_plugin",
    "android.package_gradle",
    "android.version",
    # AndroidManifest.xml
    "android.package_manifest",
    "android.allow_backup",
    # Intent filters must come before the scheme plugin: both write the main
    # activity's intent filters and the later one wins.
    "android.intent_filters",
    "android.scheme",
    "android.orientation",
    "android.permissions",
    "android.ui_mode_manifest",
    # MainActivity
    "android.ui_mode_main_activity",
    # strings.xml
    "android.name",
)

# Most important first. Also edits colors.xml and styles.xml.
ANDROID_DANGEROUS_PLUGINS = (
    "android.icons",
    "android.primary_color",
    "android.status_bar",
    "android.navigation_bar",
    "android.root_view_background_color",
    "android.google_services_file",
)

# Moves and renames source files for a changed package. Always last, so every
# other plugin sees the pre-refactor package.
PACKAGE_REFACTOR = "android.package_refactor"


def android_plugin_entries(*, registry: Optional[PluginRegistry] = None) -> List[PipelineEntry]:
    return [
        *required_entries(ANDROID_PLUGINS, registry=registry),
        *dangerous_entries(ANDROID_DANGEROUS_PLUGINS, registry=registry),
        required(PACKAGE_REFACTOR, registry=registry),
    ]


def with_android_plugins(
    config: AppConfig,
    package: str,
    *,
    registry: Optional[PluginRegistry] = None,
) -> AppConfig:
    """Apply every default Android plugin.

    ``android.package`` is set before the pipeline starts so every plugin can
    rely on it.
    """
    config = seed_platform_field(config, "android", "package", package)
    return with_plugins(config, android_plugin_entries(registry=registry))


__all__ = [
    "ANDROID_PLUGINS",
    "ANDROID_DANGEROUS_PLUGINS",
    "PACKAGE_REFACTOR",
    "android_plugin_entries",
    "with_android_plugins",
]

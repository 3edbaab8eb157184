"""Platform pipelines built on the executor and the resolver.

- with_ios_plugins: default iOS plugins, bundle identifier first
- with_android_plugins: default Android plugins, package refactor last
- with_versioned_sdk_plugins: first-party SDK plugins
- with_legacy_plugins: optional capabilities, skipped when unavailable
"""
from __future__ import annotations

from .android import with_android_plugins
from .ios import with_ios_plugins
from .legacy import (
    get_legacy_plugins,
    get_managed_versioned_plugins,
    unique_plugin_names,
    with_legacy_plugins,
    with_optional_legacy_plugins,
)
from .versioned import with_versioned_sdk_plugins

__all__ = [
    "with_ios_plugins",
    "with_android_plugins",
    "with_versioned_sdk_plugins",
    "with_legacy_plugins",
    "with_optional_legacy_plugins",
    "get_legacy_plugins",
    "get_managed_versioned_plugins",
    "unique_plugin_names",
]

"""
config-plugins - composable app config transformations

Runs an app configuration through ordered config plugins, resolves optional
plugins by name, and ships the default iOS, Android, SDK and legacy pipelines.
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigError,
    ConfigPluginsError,
    InvalidPluginError,
    PluginNotFoundError,
    PluginResolutionError,
    UnitFailure,
)
from .history import add_history_item, create_run_once_plugin, get_history_item, with_run_once
from .pipeline import with_plugins
from .registry import LookupResult, LookupStatus, PluginRegistry, get_registry, reset_registry, set_registry
from .static_plugin import PluginReference, resolve_and_apply, static_plugin, with_static_plugin
from .stdlib_logging import configure_logging, configure_logging_from_config
from .types import AppConfig, PipelineEntry, PluginUnit, create_plugin, noop_plugin

__all__ = [
    "__version__",
    # Errors
    "ConfigPluginsError",
    "UnitFailure",
    "PluginResolutionError",
    "PluginNotFoundError",
    "InvalidPluginError",
    "ConfigError",
    # Types
    "AppConfig",
    "PipelineEntry",
    "PluginUnit",
    "create_plugin",
    "noop_plugin",
    # Executor
    "with_plugins",
    # Resolution
    "LookupResult",
    "LookupStatus",
    "PluginRegistry",
    "get_registry",
    "set_registry",
    "reset_registry",
    "PluginReference",
    "with_static_plugin",
    "resolve_and_apply",
    "static_plugin",
    # Logging
    "configure_logging",
    "configure_logging_from_config",
    # History
    "get_history_item",
    "add_history_item",
    "with_run_once",
    "create_run_once_plugin",
]

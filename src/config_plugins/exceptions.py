from __future__ import annotations

from typing import Any, Dict, Mapping


class ConfigPluginsError(Exception):
    """Base exception for the config plugin engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UnitFailure(ConfigPluginsError, RuntimeError):
    """Raised when a config plugin fails while applying its mutation.

    The original exception is chained as ``__cause__``. The configuration may
    already be partially mutated; nothing is rolled back.
    """

    def __init__(
        self,
        message: str = "",
        *,
        plugin: str | None = None,
        index: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if plugin is not None:
            ctx["plugin"] = plugin
        if index is not None:
            ctx["index"] = index
        ConfigPluginsError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.plugin = plugin
        self.index = index


class PluginResolutionError(ConfigPluginsError, LookupError):
    """Base class for failures to resolve a plugin by name."""

    def __init__(self, message: str = "", *, plugin: str | None = None, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        if plugin is not None:
            ctx["plugin"] = plugin
        ConfigPluginsError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.plugin = plugin


class PluginNotFoundError(PluginResolutionError):
    """Raised when no registry source knows a plugin name."""


class InvalidPluginError(PluginResolutionError):
    """Raised when a plugin exists but cannot be used (import error, not callable)."""


class ConfigError(ConfigPluginsError, ValueError):
    """Raised when the YAML configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigPluginsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ConfigPluginsError",
    "UnitFailure",
    "PluginResolutionError",
    "PluginNotFoundError",
    "InvalidPluginError",
    "ConfigError",
]

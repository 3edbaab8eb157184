"""Plugin registry: resolve a plugin name to a config plugin.

Lookups return a :class:`LookupResult` rather than raising, so callers can
tell "absent" apart from "present but invalid":

    result = registry.lookup("expo-camera")
    if result.status is LookupStatus.FOUND:
        config = result.plugin(config, None)

Sources are tried in a fixed order:
1. explicit registrations (``register`` / the ``plugin`` decorator)
2. configured import paths (``plugins.modules``)
3. project plugin files (``<project_root>/<plugins.localDir>/<name>.py``)
4. installed entry points (``plugins.entryPointGroup``)
5. an importable module named after the plugin (``expo-av`` -> ``expo_av``)

Results are cached per name, so a name resolves to the same plugin for the
lifetime of the registry. Registering or unregistering a name drops its cached
result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import loader
from .types import AppConfig, ConfigPlugin, PluginUnit

logger = logging.getLogger(__name__)


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a registry lookup."""

    name: str
    status: LookupStatus
    plugin: Optional[PluginUnit] = None
    error: Optional[BaseException] = None
    source: Optional[str] = None

    @classmethod
    def found(cls, name: str, plugin: PluginUnit, source: str) -> "LookupResult":
        return cls(name=name, status=LookupStatus.FOUND, plugin=plugin, source=source)

    @classmethod
    def not_found(cls, name: str) -> "LookupResult":
        return cls(name=name, status=LookupStatus.NOT_FOUND)

    @classmethod
    def malformed(cls, name: str, error: BaseException, source: str) -> "LookupResult":
        return cls(name=name, status=LookupStatus.MALFORMED, error=error, source=source)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND


def _as_unit(name: str, obj: Any) -> PluginUnit:
    if isinstance(obj, PluginUnit):
        return obj
    return PluginUnit(name=name, fn=obj)


def _check_callable(name: str, obj: Any, source: str) -> LookupResult:
    if not callable(obj):
        return LookupResult.malformed(
            name, TypeError(f"Plugin '{name}' from {source} is not callable: {type(obj).__name__}"), source
        )
    return LookupResult.found(name, _as_unit(name, obj), source)


class PluginRegistry:
    """Resolves plugin names through registrations, config, files and installed packages."""

    def __init__(
        self,
        *,
        project_root: Optional[Path] = None,
        modules: Optional[Mapping[str, str]] = None,
        local_dir: str = "",
        entry_point_group: Optional[str] = None,
        module_attribute: str = "config_plugin",
        import_modules: bool = True,
    ) -> None:
        """Initialize registry.

        Args:
            project_root: Root used to find project plugin files.
            modules: Explicit import paths, name -> ``"package.module:attribute"``.
            local_dir: Plugin file directory relative to ``project_root`` ("" disables).
            entry_point_group: Entry point group to search (None disables).
            module_attribute: Attribute holding the plugin in files and modules.
            import_modules: Whether to try importing a module named after the plugin.
        """
        self.project_root = Path(project_root) if project_root is not None else None
        self.modules: Dict[str, str] = dict(modules or {})
        self.local_dir = local_dir
        self.entry_point_group = entry_point_group
        self.module_attribute = module_attribute
        self.import_modules = import_modules
        self._plugins: Dict[str, PluginUnit] = {}
        self._cache: Dict[str, LookupResult] = {}

    @classmethod
    def from_config(cls, repo_root: Optional[Path] = None) -> "PluginRegistry":
        """Build a registry from the ``plugins`` config section."""
        from .config.domains import PluginsConfig

        cfg = PluginsConfig(repo_root=repo_root)
        return cls(
            project_root=cfg.repo_root,
            modules=cfg.modules,
            local_dir=cfg.local_dir,
            entry_point_group=cfg.entry_point_group,
            module_attribute=cfg.module_attribute,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, plugin: Callable[..., AppConfig]) -> PluginUnit:
        """Register ``plugin`` under ``name`` and return it as a named unit.

        Raises:
            TypeError: If plugin is not callable
        """
        if not callable(plugin):
            raise TypeError("plugin must be callable")
        unit = _as_unit(name, plugin)
        self._plugins[name] = unit
        self._cache.pop(name, None)
        return unit

    def plugin(self, name: str) -> Callable[[Callable[..., AppConfig]], PluginUnit]:
        """Decorator form of :meth:`register`."""

        def _decorator(fn: Callable[..., AppConfig]) -> PluginUnit:
            return self.register(name, fn)

        return _decorator

    def unregister(self, name: str) -> None:
        self._plugins.pop(name, None)
        self._cache.pop(name, None)

    def list_names(self) -> List[str]:
        """Sorted names of explicitly registered plugins."""
        return sorted(self._plugins)

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def has(self, name: str) -> bool:
        return self.lookup(name).ok

    def lookup(self, name: str) -> LookupResult:
        cached = self._cache.get(name)
        if cached is not None:
            return cached
        result = self._resolve(name)
        if result.status is LookupStatus.MALFORMED:
            logger.debug("Plugin %s is malformed (%s): %s", name, result.source, result.error)
        else:
            logger.debug("Plugin %s lookup: %s (%s)", name, result.status.value, result.source)
        self._cache[name] = result
        return result

    def get(self, name: str) -> Optional[ConfigPlugin]:
        """Return the plugin for ``name`` or None when absent or malformed."""
        return self.lookup(name).plugin

    def _resolve(self, name: str) -> LookupResult:
        for source in (
            self._from_registered,
            self._from_configured_module,
            self._from_local_file,
            self._from_entry_point,
            self._from_module,
        ):
            result = source(name)
            if result is not None:
                return result
        return LookupResult.not_found(name)

    def _from_registered(self, name: str) -> Optional[LookupResult]:
        unit = self._plugins.get(name)
        if unit is None:
            return None
        return LookupResult.found(name, unit, "registered")

    def _from_configured_module(self, name: str) -> Optional[LookupResult]:
        path = self.modules.get(name)
        if not path:
            return None
        source = f"module path '{path}'"
        try:
            obj = loader.import_object(path)
        except Exception as exc:
            return LookupResult.malformed(name, exc, source)
        return _check_callable(name, obj, source)

    def _from_local_file(self, name: str) -> Optional[LookupResult]:
        if self.project_root is None or not self.local_dir:
            return None
        path = loader.plugin_file_path(self.project_root / self.local_dir, name)
        if path is None:
            return None
        source = f"file '{path}'"
        try:
            module = loader.load_module_from_path(path)
        except Exception as exc:
            return LookupResult.malformed(name, exc, source)
        return self._attribute_result(name, module, source)

    def _from_entry_point(self, name: str) -> Optional[LookupResult]:
        if not self.entry_point_group:
            return None
        ep = loader.find_entry_point(self.entry_point_group, name)
        if ep is None:
            return None
        source = f"entry point '{self.entry_point_group}:{name}'"
        try:
            obj = ep.load()
        except Exception as exc:
            return LookupResult.malformed(name, exc, source)
        return _check_callable(name, obj, source)

    def _from_module(self, name: str) -> Optional[LookupResult]:
        if not self.import_modules:
            return None
        module_name = loader.module_name_for_plugin(name)
        if module_name is None:
            return None
        source = f"module '{module_name}'"
        try:
            module = loader.import_module(module_name)
        except Exception as exc:
            if loader.is_missing_module_error(exc, module_name):
                return None
            return LookupResult.malformed(name, exc, source)
        return self._attribute_result(name, module, source)

    def _attribute_result(self, name: str, module: Any, source: str) -> LookupResult:
        if not hasattr(module, self.module_attribute):
            return LookupResult.malformed(
                name,
                AttributeError(f"{source} does not define '{self.module_attribute}'"),
                source,
            )
        return _check_callable(name, getattr(module, self.module_attribute), source)


# Global registry instance, built lazily from configuration.
_default_registry: Optional[PluginRegistry] = None


def get_registry() -> PluginRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = PluginRegistry.from_config()
    return _default_registry


def set_registry(registry: Optional[PluginRegistry]) -> None:
    global _default_registry
    _default_registry = registry


def reset_registry() -> None:
    set_registry(None)


__all__ = [
    "LookupStatus",
    "LookupResult",
    "PluginRegistry",
    "get_registry",
    "set_registry",
    "reset_registry",
]

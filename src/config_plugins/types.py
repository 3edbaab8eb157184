"""Core types shared by the pipeline, the resolver and the platform pipelines.

A config plugin is any callable ``(config, props) -> config``. ``props`` is
``None`` when the plugin is applied without parameters.

Pipelines are written as plain lists mixing bare plugins and
``(plugin, props)`` pairs; :func:`normalize_entries` turns such a list into
:class:`PipelineEntry` values once, when the list is built.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Union

AppConfig = Dict[str, Any]


class ConfigPlugin(Protocol):
    """Transformation unit: returns the (new or mutated) configuration."""

    def __call__(self, config: AppConfig, props: Any = None) -> AppConfig: ...


@dataclass(frozen=True)
class PluginUnit:
    """A config plugin with a stable name.

    The name is used for registry lookup, log messages, error context and
    plugin history.
    """

    name: str
    fn: Callable[[AppConfig, Any], AppConfig]

    def __call__(self, config: AppConfig, props: Any = None) -> AppConfig:
        return self.fn(config, props)


def create_plugin(name: str, fn: Callable[[AppConfig, Any], AppConfig]) -> PluginUnit:
    """Wrap ``fn`` as a named plugin."""
    if not callable(fn):
        raise TypeError("plugin must be callable")
    return PluginUnit(name=name, fn=fn)


def get_plugin_name(plugin: Any) -> str:
    """Best-effort display name for a plugin."""
    name = getattr(plugin, "name", None)
    if isinstance(name, str) and name:
        return name
    for attr in ("__qualname__", "__name__"):
        value = getattr(plugin, attr, None)
        if isinstance(value, str) and value:
            return value
    return type(plugin).__name__


def noop_plugin(config: AppConfig, props: Any = None) -> AppConfig:
    """Identity plugin, used as the fallback for optional capabilities."""
    return config


@dataclass(frozen=True)
class PipelineEntry:
    """One step of a pipeline: a plugin, optionally paired with props."""

    plugin: ConfigPlugin
    props: Any = None
    parameterized: bool = False

    @classmethod
    def bare(cls, plugin: ConfigPlugin) -> "PipelineEntry":
        return cls(plugin=plugin)

    @classmethod
    def with_props(cls, plugin: ConfigPlugin, props: Any) -> "PipelineEntry":
        return cls(plugin=plugin, props=props, parameterized=True)

    @property
    def name(self) -> str:
        return get_plugin_name(self.plugin)


EntryLike = Union[PipelineEntry, ConfigPlugin, Tuple[ConfigPlugin, Any]]


def normalize_entry(entry: EntryLike) -> PipelineEntry:
    if isinstance(entry, PipelineEntry):
        return entry
    if isinstance(entry, tuple):
        if len(entry) != 2:
            raise TypeError(f"Pipeline entry tuples must be (plugin, props), got {len(entry)} items")
        plugin, props = entry
        if not callable(plugin):
            raise TypeError(f"Pipeline entry plugin is not callable: {plugin!r}")
        return PipelineEntry.with_props(plugin, props)
    if callable(entry):
        return PipelineEntry.bare(entry)
    raise TypeError(f"Invalid pipeline entry: {entry!r}")


def normalize_entries(entries: Optional[Iterable[EntryLike]]) -> List[PipelineEntry]:
    return [normalize_entry(e) for e in (entries or [])]


__all__ = [
    "AppConfig",
    "ConfigPlugin",
    "PluginUnit",
    "PipelineEntry",
    "EntryLike",
    "create_plugin",
    "get_plugin_name",
    "noop_plugin",
    "normalize_entry",
    "normalize_entries",
]

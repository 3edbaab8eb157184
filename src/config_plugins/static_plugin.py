"""Apply plugins referenced by name, with fallback and error suppression.

A :class:`PluginReference` points at a plugin either directly (a callable)
or symbolically (a name looked up in a :class:`~config_plugins.registry.PluginRegistry`).

Resolution outcomes for a name:

================  ===========================  ==============================
lookup status     suppress_errors=False        suppress_errors=True
================  ===========================  ==============================
found             apply plugin                 apply plugin
not found         fallback, else raise         fallback, else no-op
                  PluginNotFoundError
malformed         fallback, else raise         fallback, else no-op
                  InvalidPluginError
================  ===========================  ==============================

Suppressed failures are logged at DEBUG level so silent skips stay
diagnosable. Errors raised while *applying* a plugin are never suppressed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union

from .exceptions import InvalidPluginError, PluginNotFoundError
from .pipeline import apply_entry
from .registry import LookupResult, LookupStatus, PluginRegistry, get_registry
from .types import AppConfig, ConfigPlugin, PipelineEntry, PluginUnit

logger = logging.getLogger(__name__)

StaticPlugin = Union[str, ConfigPlugin, Tuple[Union[str, ConfigPlugin], Any]]


@dataclass(frozen=True)
class PluginReference:
    """A possibly symbolic handle to a plugin plus its resolution policy.

    Attributes:
        plugin: Plugin name, plugin callable, or a ``(name|plugin, props)`` pair.
        props: Props for the plugin; ignored when ``plugin`` is a pair.
        fallback: Applied (with the same props) when the name cannot be used.
        suppress_errors: Treat every resolution failure as optional: apply the
            fallback, or leave the config untouched. Used for legacy capabilities.
    """

    plugin: StaticPlugin
    props: Any = None
    fallback: Optional[ConfigPlugin] = None
    suppress_errors: bool = False

    def normalized(self) -> Tuple[Union[str, ConfigPlugin], Any, bool]:
        """Return ``(target, props, parameterized)``."""
        if isinstance(self.plugin, tuple):
            if len(self.plugin) != 2:
                raise TypeError(f"Static plugin tuples must be (plugin, props), got {len(self.plugin)} items")
            target, props = self.plugin
            return target, props, True
        return self.plugin, self.props, self.props is not None


def _entry(plugin: ConfigPlugin, props: Any, parameterized: bool) -> PipelineEntry:
    if parameterized:
        return PipelineEntry.with_props(plugin, props)
    return PipelineEntry.bare(plugin)


def _log_suppressed(result: LookupResult, action: str) -> None:
    logger.debug(
        "Suppressed resolution failure for plugin %s (%s): %s; %s",
        result.name,
        result.status.value,
        result.error if result.error is not None else "no source provides it",
        action,
    )


def with_static_plugin(
    config: AppConfig,
    reference: PluginReference,
    *,
    registry: Optional[PluginRegistry] = None,
) -> AppConfig:
    """Resolve ``reference`` and apply it to ``config``.

    Raises:
        PluginNotFoundError: Name is unknown, no fallback, no suppression.
        InvalidPluginError: Name resolves to an unusable plugin, no fallback, no suppression.
        UnitFailure: The resolved plugin (or fallback) raised.
    """
    target, props, parameterized = reference.normalized()

    if not isinstance(target, str):
        if not callable(target):
            raise TypeError(f"Static plugin must be a name or a callable, got {target!r}")
        return apply_entry(config, _entry(target, props, parameterized))

    name = target
    result = (registry or get_registry()).lookup(name)

    if result.status is LookupStatus.FOUND and result.plugin is not None:
        return apply_entry(config, _entry(result.plugin, props, parameterized))

    if result.status is LookupStatus.NOT_FOUND and not reference.suppress_errors and reference.fallback is None:
        raise PluginNotFoundError(f"Failed to resolve plugin for module '{name}'", plugin=name)

    if result.status is LookupStatus.MALFORMED and not reference.suppress_errors and reference.fallback is None:
        raise InvalidPluginError(
            f"Plugin '{name}' is invalid ({result.source}): {result.error}",
            plugin=name,
            context={"source": result.source},
        ) from result.error

    if reference.fallback is None:
        _log_suppressed(result, "skipping")
        return config

    _log_suppressed(result, "applying fallback")
    fallback = reference.fallback
    if not isinstance(fallback, PluginUnit):
        fallback = PluginUnit(name=f"{name} (fallback)", fn=fallback)
    return apply_entry(config, _entry(fallback, props, parameterized))


resolve_and_apply = with_static_plugin


def static_plugin(
    name: str,
    props: Any = None,
    *,
    fallback: Optional[ConfigPlugin] = None,
    suppress_errors: bool = False,
    registry: Optional[PluginRegistry] = None,
) -> PluginUnit:
    """Return a named plugin that resolves ``name`` when it is applied.

    Lets a pipeline list a plugin by name; lookup happens at its step, not
    when the list is built. Props given by a parameterized pipeline entry
    replace ``props``.
    """
    reference = PluginReference(plugin=name, props=props, fallback=fallback, suppress_errors=suppress_errors)

    def _apply(config: AppConfig, entry_props: Any = None) -> AppConfig:
        ref = reference if entry_props is None else replace(reference, props=entry_props)
        return with_static_plugin(config, ref, registry=registry)

    return PluginUnit(name=name, fn=_apply)


__all__ = [
    "StaticPlugin",
    "PluginReference",
    "with_static_plugin",
    "resolve_and_apply",
    "static_plugin",
]

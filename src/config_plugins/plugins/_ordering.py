"""Helpers for building the hand-ordered platform pipelines."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..registry import PluginRegistry
from ..static_plugin import static_plugin
from ..types import PipelineEntry


def required(name: str, props: Any = None, *, registry: Optional[PluginRegistry] = None) -> PipelineEntry:
    """Entry for a plugin that must resolve; a missing name raises PluginNotFoundError."""
    unit = static_plugin(name, registry=registry)
    if props is None:
        return PipelineEntry.bare(unit)
    return PipelineEntry.with_props(unit, props)


def required_entries(names: Sequence[str], *, registry: Optional[PluginRegistry] = None) -> List[PipelineEntry]:
    return [required(name, registry=registry) for name in names]


def dangerous_entries(
    names_by_priority: Sequence[str], *, registry: Optional[PluginRegistry] = None
) -> List[PipelineEntry]:
    """Entries for the dangerous group, most important plugin last.

    ``names_by_priority`` lists the most important plugin first. The group is
    appended in reverse so that plugin has the final say over the files the
    group touches.
    """
    return required_entries(list(reversed(names_by_priority)), registry=registry)


def seed_platform_field(config: dict, platform: str, key: str, value: Any) -> dict:
    """Set ``config[platform][key]`` before the pipeline runs."""
    if not config.get(platform):
        config[platform] = {}
    config[platform][key] = value
    return config


__all__ = ["required", "required_entries", "dangerous_entries", "seed_platform_field"]

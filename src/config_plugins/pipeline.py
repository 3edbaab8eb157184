"""Sequential application of config plugins.

``with_plugins`` is a strict left-to-right fold: each plugin receives exactly
the configuration returned by the previous one. The first failure stops the
pipeline; the configuration is not rolled back.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from .exceptions import ConfigPluginsError, UnitFailure
from .types import AppConfig, EntryLike, PipelineEntry, normalize_entries

logger = logging.getLogger(__name__)


def _step(index: Optional[int]) -> str:
    return f" at step {index}" if index is not None else ""


def apply_entry(config: AppConfig, entry: PipelineEntry, *, index: Optional[int] = None) -> AppConfig:
    """Apply a single pipeline entry.

    Raises:
        UnitFailure: the plugin raised, or returned ``None``.
    """
    name = entry.name
    logger.debug("Applying plugin %s%s", name, _step(index))
    try:
        result = entry.plugin(config, entry.props)
    except UnitFailure as exc:
        # Nested failure (a plugin that runs plugins): keep the innermost
        # plugin name, record the outer step.
        if exc.index is None and index is not None:
            exc.index = index
            exc.context["index"] = index
        raise
    except ConfigPluginsError:
        raise
    except Exception as exc:
        raise UnitFailure(
            f"Plugin '{name}' failed{_step(index)}: {exc}",
            plugin=name,
            index=index,
        ) from exc
    if result is None:
        raise UnitFailure(
            f"Plugin '{name}' did not return a config{_step(index)}",
            plugin=name,
            index=index,
        )
    return result


def with_plugins(config: AppConfig, entries: Optional[Iterable[EntryLike]]) -> AppConfig:
    """Apply ``entries`` to ``config`` in order and return the final config.

    Entries are plugins or ``(plugin, props)`` pairs (or ``PipelineEntry``).
    An empty list returns ``config`` unchanged.
    """
    for index, entry in enumerate(normalize_entries(entries)):
        config = apply_entry(config, entry, index=index)
    return config


__all__ = ["apply_entry", "with_plugins"]

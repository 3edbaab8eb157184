from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "config_plugins"

_INSTALLED_HANDLER: logging.Handler | None = None
_INSTALLED_TARGET: str | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s",
) -> logging.Handler:
    """Install one handler on the package logger.

    Writes to ``log_path`` when given, stderr otherwise. Calling again with a
    different target replaces the previously installed handler; calling with
    the same target only updates the level.
    """
    global _INSTALLED_HANDLER, _INSTALLED_TARGET

    logger = logging.getLogger(PACKAGE_LOGGER)
    numeric = _level_from_name(level)
    logger.setLevel(numeric)

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    if _INSTALLED_HANDLER is not None and _INSTALLED_TARGET == target:
        _INSTALLED_HANDLER.setLevel(numeric)
        return _INSTALLED_HANDLER

    _remove_installed_handler(logger)

    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    _INSTALLED_HANDLER = handler
    _INSTALLED_TARGET = target
    return handler


def configure_logging_from_config(repo_root: Optional[Path] = None) -> logging.Handler:
    """Configure logging from the ``logging`` config section."""
    from config_plugins.config.domains import LoggingConfig

    cfg = LoggingConfig(repo_root=repo_root)
    return configure_logging(level=cfg.level, log_path=cfg.log_path, fmt=cfg.format)


def _remove_installed_handler(logger: logging.Logger) -> None:
    global _INSTALLED_HANDLER, _INSTALLED_TARGET
    if _INSTALLED_HANDLER is None:
        return
    logger.removeHandler(_INSTALLED_HANDLER)
    _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None
    _INSTALLED_TARGET = None


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler and reset the level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed_handler(logger)
    logger.setLevel(logging.NOTSET)


__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "configure_logging_from_config",
    "reset_logging_for_tests",
]

"""Domain-specific configuration for stdlib logging."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING") or "WARNING").upper()

    @cached_property
    def format(self) -> str:
        return str(self.section.get("format") or DEFAULT_FORMAT)

    @cached_property
    def log_path(self) -> Path | None:
        raw = str(self.section.get("path", "") or "").strip()
        if not raw:
            return None
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self.repo_root / path
        return path.resolve()


__all__ = ["LoggingConfig", "DEFAULT_FORMAT"]

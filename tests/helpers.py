"""Shared test helpers."""
from __future__ import annotations

from pathlib import Path


def write_module(directory: Path, module_name: str, source: str) -> Path:
    """Write ``<directory>/<module_name>.py`` and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{module_name}.py"
    path.write_text(source, encoding="utf-8")
    return path


def write_project_config(root: Path, yaml_text: str, filename: str = "config.yaml") -> Path:
    cfg = root / ".config-plugins" / "config" / filename
    cfg.parent.mkdir(parents=True, exist_ok=True)
    cfg.write_text(yaml_text, encoding="utf-8")
    return cfg

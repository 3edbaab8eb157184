"""Dynamic loading helpers used by the plugin registry.

Three ways to turn a plugin name into a Python object:
- an explicit import path ``"package.module:attribute"``
- a plugin file on disk (``<dir>/<name>.py``), loaded without touching ``sys.modules``
- an installed entry point in a known group

Every helper raises on failure; the registry decides whether a failure means
"not found" or "malformed".
"""
from __future__ import annotations

import importlib
import importlib.util
import re
from importlib.metadata import EntryPoint, entry_points
from pathlib import Path
from types import ModuleType
from typing import Any, Optional

_MODULE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_FILE_STEM_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")


def module_name_for_plugin(name: str) -> Optional[str]:
    """Map a package-style plugin name to an importable module name.

    ``expo-av`` -> ``expo_av``; ``@scope/pkg`` -> ``scope.pkg``. Returns
    ``None`` when the result is not a valid dotted module name.

    Example:
        >>> module_name_for_plugin("expo-file-system")
        'expo_file_system'
    """
    candidate = name.lstrip("@").replace("/", ".").replace("-", "_")
    if _MODULE_NAME_RE.match(candidate):
        return candidate
    return None


def is_missing_module_error(exc: BaseException, module_name: str) -> bool:
    """True when ``exc`` reports that ``module_name`` itself (or a parent) is absent.

    A ``ModuleNotFoundError`` raised for some other module means the plugin
    exists but one of its own imports is broken.
    """
    if not isinstance(exc, ModuleNotFoundError):
        return False
    missing = exc.name or ""
    return missing == module_name or module_name.startswith(missing + ".")


def import_module(module_name: str) -> ModuleType:
    return importlib.import_module(module_name)


def import_object(path: str) -> Any:
    """Import ``"package.module:attribute"`` (attribute may be dotted)."""
    module_path, sep, attr_path = path.partition(":")
    if not sep or not module_path or not attr_path:
        raise ValueError(f"Import path must look like 'package.module:attribute', got '{path}'")
    obj: Any = importlib.import_module(module_path)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def plugin_file_path(directory: Path, name: str) -> Optional[Path]:
    """Return ``<directory>/<name>.py`` if the name is a safe file stem and the file exists."""
    if not _FILE_STEM_RE.match(name):
        return None
    path = Path(directory) / f"{name}.py"
    return path if path.is_file() else None


def load_module_from_path(path: Path, namespace: str = "config_plugins.dynamic") -> ModuleType:
    """Execute a Python file as a module without adding it to ``sys.modules``."""
    module_name = f"{namespace}.{path.stem.replace('-', '_').replace('.', '_')}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load plugin file {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def find_entry_point(group: str, name: str) -> Optional[EntryPoint]:
    """Find the entry point ``name`` in ``group``.

    When several distributions declare the same name, the first one by
    (distribution name, value) wins.
    """
    matches = [ep for ep in entry_points(group=group) if ep.name == name]
    if not matches:
        return None

    def _sort_key(ep: EntryPoint) -> tuple[str, str]:
        dist = getattr(ep, "dist", None)
        dist_name = getattr(dist, "name", "") or ""
        return (dist_name, ep.value)

    return sorted(matches, key=_sort_key)[0]


__all__ = [
    "module_name_for_plugin",
    "is_missing_module_error",
    "import_module",
    "import_object",
    "plugin_file_path",
    "load_module_from_path",
    "find_entry_point",
]

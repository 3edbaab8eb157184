from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'config_plugins' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config_plugins.config.cache import clear_all_caches
from config_plugins.registry import PluginRegistry, reset_registry
from config_plugins.stdlib_logging import reset_logging_for_tests
from config_plugins.types import PluginUnit

Call = Tuple[str, Any]


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch):
    """Fresh config cache, default registry and logging for every test."""
    for key in list(os.environ):
        if key.startswith("CONFIG_PLUGINS_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    reset_registry()
    yield
    clear_all_caches()
    reset_registry()
    reset_logging_for_tests()


@pytest.fixture
def registry() -> PluginRegistry:
    """Registry that only knows explicit registrations."""
    return PluginRegistry(import_modules=False)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def calls() -> List[Call]:
    return []


@pytest.fixture
def recorder(calls: List[Call]) -> Callable[..., PluginUnit]:
    """Build named plugins that record (name, props) and append to config["applied"]."""

    def _make(name: str, mutate: Callable[[dict, Any], None] | None = None) -> PluginUnit:
        def _plugin(config: dict, props: Any = None) -> dict:
            calls.append((name, props))
            config.setdefault("applied", []).append(name)
            if mutate is not None:
                mutate(config, props)
            return config

        return PluginUnit(name=name, fn=_plugin)

    return _make


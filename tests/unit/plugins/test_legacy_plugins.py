from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config_plugins.config.domains import PluginsConfig
from config_plugins.exceptions import UnitFailure
from config_plugins.history import add_history_item, create_run_once_plugin
from config_plugins.plugins import (
    get_legacy_plugins,
    get_managed_versioned_plugins,
    unique_plugin_names,
    with_legacy_plugins,
    with_optional_legacy_plugins,
)
from helpers import write_project_config


def test_unique_plugin_names_keeps_first_occurrence() -> None:
    assert unique_plugin_names(["y", "z"], ["x", "y"]) == ["y", "z", "x"]
    assert unique_plugin_names([], []) == []


@pytest.mark.parametrize(
    "legacy,versioned",
    [
        (["x", "y"], ["y", "z"]),
        (["y", "x"], ["z", "y"]),
        (["x", "y", "x"], ["z", "y", "z"]),
    ],
)
def test_each_capability_is_resolved_once(
    project_root: Path, registry, recorder, calls, legacy, versioned
) -> None:
    write_project_config(
        project_root,
        "plugins:\n"
        f"  legacy: {legacy}\n"
        f"  managedVersioned: {versioned}\n",
    )
    for name in ("x", "y", "z"):
        registry.register(name, recorder(name))

    with_legacy_plugins({}, registry=registry, plugins_config=PluginsConfig(project_root))

    applied = sorted(name for name, _ in calls)
    assert applied == ["x", "y", "z"]


def test_managed_versioned_pool_runs_first(project_root: Path, registry, recorder, calls) -> None:
    write_project_config(project_root, "plugins:\n  legacy: [a]\n  managedVersioned: [b]\n")
    registry.register("a", recorder("a"))
    registry.register("b", recorder("b"))

    with_legacy_plugins({}, registry=registry, plugins_config=PluginsConfig(project_root))

    assert [name for name, _ in calls] == ["b", "a"]


def test_missing_capability_leaves_config_unchanged(registry) -> None:
    config = {"name": "app", "slug": "app"}

    out = with_optional_legacy_plugins(config, ["missing_plugin"], registry=registry)

    assert out == {"name": "app", "slug": "app"}


def test_malformed_capability_is_skipped(registry, recorder, calls, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="config_plugins")
    registry.modules["expo-broken"] = "cp_not_installed_anywhere:config_plugin"
    registry.register("expo-av", recorder("expo-av"))

    out = with_optional_legacy_plugins({}, ["expo-broken", "expo-av"], registry=registry)

    assert out["applied"] == ["expo-av"]
    assert any("expo-broken" in r.getMessage() for r in caplog.records)


def test_capability_props_are_passed(registry, recorder, calls) -> None:
    registry.register("expo-camera", recorder("expo-camera"))

    with_optional_legacy_plugins({}, [("expo-camera", {"permission": "x"})], registry=registry)

    assert calls == [("expo-camera", {"permission": "x"})]


def test_installed_capability_applies_regardless_of_history(registry, recorder, calls) -> None:
    registry.register("expo-av", recorder("expo-av"))
    config = add_history_item({}, "expo-av", "9.0.0")

    with_optional_legacy_plugins(config, ["expo-av"], registry=registry)

    assert calls == [("expo-av", None)]


def test_run_once_capability_is_not_applied_twice(registry, recorder, calls) -> None:
    registry.register("expo-av", create_run_once_plugin(recorder("expo-av"), "expo-av", "9.0.0"))

    out = with_optional_legacy_plugins({}, ["expo-av", "expo-av"], registry=registry)

    assert calls == [("expo-av", None)]
    assert out["_internal"]["pluginHistory"]["expo-av"]["version"] == "9.0.0"


def test_capability_failures_still_propagate(registry) -> None:
    def boom(config, props=None):
        raise ValueError("broken capability")

    registry.register("expo-av", boom)

    with pytest.raises(UnitFailure) as exc_info:
        with_optional_legacy_plugins({}, ["expo-av"], registry=registry)

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_bundled_pools(project_root: Path) -> None:
    legacy = get_legacy_plugins()
    versioned = get_managed_versioned_plugins()

    assert "expo-camera" in legacy
    assert "expo-local-authentication" in legacy
    assert versioned == ["expo-firebase-analytics", "expo-firebase-core", "expo-google-sign-in"]


def test_project_can_append_to_bundled_pool(project_root: Path) -> None:
    write_project_config(project_root, "plugins:\n  legacy: ['+', my-capability]\n")

    legacy = get_legacy_plugins()

    assert legacy[0] == "expo-app-auth"
    assert legacy[-1] == "my-capability"


def test_bundled_pipeline_with_nothing_installed_is_noop(project_root: Path, registry) -> None:
    assert with_legacy_plugins({"name": "app"}, registry=registry) == {"name": "app"}

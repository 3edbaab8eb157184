from __future__ import annotations

import logging
from typing import Any, Callable, List

import pytest

from config_plugins.exceptions import InvalidPluginError, PluginNotFoundError, UnitFailure
from config_plugins.history import add_history_item, create_run_once_plugin
from config_plugins.pipeline import with_plugins
from config_plugins.registry import PluginRegistry, set_registry
from config_plugins.static_plugin import PluginReference, static_plugin, with_static_plugin
from config_plugins.types import PluginUnit, noop_plugin


@pytest.fixture
def broken_registry(registry: PluginRegistry) -> PluginRegistry:
    """Registry where 'expo-broken' is present but cannot be used."""
    registry.modules["expo-broken"] = "cp_module_that_does_not_exist:config_plugin"
    return registry


class TestFound:
    def test_applies_registered_plugin(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))

        out = with_static_plugin({}, PluginReference("expo-camera"), registry=registry)

        assert out["applied"] == ["expo-camera"]
        assert calls == [("expo-camera", None)]

    def test_passes_props(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))
        props = {"cameraPermission": "Allow camera"}

        with_static_plugin({}, PluginReference("expo-camera", props=props), registry=registry)

        assert calls[0][1] is props

    def test_tuple_reference_carries_props(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))

        with_static_plugin({}, PluginReference(("expo-camera", {"a": 1})), registry=registry)

        assert calls == [("expo-camera", {"a": 1})]

    def test_found_plugin_ignores_fallback(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))

        with_static_plugin(
            {}, PluginReference("expo-camera", fallback=recorder("fallback")), registry=registry
        )

        assert [name for name, _ in calls] == ["expo-camera"]

    def test_callable_reference_skips_registry(self, registry, recorder, calls) -> None:
        out = with_static_plugin({}, PluginReference(recorder("inline"), props=3), registry=registry)

        assert out["applied"] == ["inline"]
        assert calls == [("inline", 3)]

    def test_uses_default_registry(self, recorder, project_root) -> None:
        custom = PluginRegistry(import_modules=False)
        custom.register("expo-av", recorder("expo-av"))
        set_registry(custom)

        assert with_static_plugin({}, PluginReference("expo-av"))["applied"] == ["expo-av"]


class TestNotFound:
    def test_raises_without_fallback(self, registry) -> None:
        with pytest.raises(PluginNotFoundError) as exc_info:
            with_static_plugin({}, PluginReference("expo-missing"), registry=registry)

        assert exc_info.value.plugin == "expo-missing"
        assert "expo-missing" in str(exc_info.value)

    def test_applies_fallback_with_same_props(self, registry, recorder, calls) -> None:
        out = with_static_plugin(
            {}, PluginReference("expo-missing", props={"p": 1}, fallback=recorder("fallback")), registry=registry
        )

        assert out["applied"] == ["fallback"]
        assert calls == [("fallback", {"p": 1})]

    def test_suppressed_without_fallback_returns_input(self, registry) -> None:
        config = {"name": "app", "ios": {"bundleIdentifier": "com.example"}}
        snapshot = {"name": "app", "ios": {"bundleIdentifier": "com.example"}}

        out = with_static_plugin({**config}, PluginReference("expo-missing", suppress_errors=True), registry=registry)

        assert out == snapshot

    def test_suppressed_with_noop_fallback_returns_input(self, registry) -> None:
        out = with_static_plugin(
            {"name": "app"},
            PluginReference("expo-missing", fallback=noop_plugin, suppress_errors=True),
            registry=registry,
        )

        assert out == {"name": "app"}

    def test_suppression_is_logged_at_debug(self, registry, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="config_plugins")

        with_static_plugin({}, PluginReference("expo-missing", suppress_errors=True), registry=registry)

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert any("Suppressed resolution failure for plugin expo-missing" in m for m in messages)


class TestMalformed:
    def test_raises_invalid_plugin_error(self, broken_registry) -> None:
        with pytest.raises(InvalidPluginError) as exc_info:
            with_static_plugin({}, PluginReference("expo-broken"), registry=broken_registry)

        assert exc_info.value.plugin == "expo-broken"
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)

    def test_fallback_replaces_broken_plugin(self, broken_registry, recorder, calls) -> None:
        out = with_static_plugin(
            {}, PluginReference("expo-broken", props={"p": 2}, fallback=recorder("fallback")), registry=broken_registry
        )

        assert out["applied"] == ["fallback"]
        assert calls == [("fallback", {"p": 2})]

    def test_suppressed_applies_fallback(self, broken_registry, recorder, calls) -> None:
        out = with_static_plugin(
            {},
            PluginReference("expo-broken", fallback=recorder("fallback"), suppress_errors=True),
            registry=broken_registry,
        )

        assert out["applied"] == ["fallback"]

    def test_suppressed_without_fallback_is_noop(self, broken_registry) -> None:
        out = with_static_plugin({"a": 1}, PluginReference("expo-broken", suppress_errors=True), registry=broken_registry)

        assert out == {"a": 1}


class TestApplyFailures:
    def test_plugin_errors_are_never_suppressed(self, registry) -> None:
        def boom(config, props=None):
            raise RuntimeError("bad manifest")

        registry.register("expo-boom", boom)

        with pytest.raises(UnitFailure) as exc_info:
            with_static_plugin(
                {}, PluginReference("expo-boom", fallback=noop_plugin, suppress_errors=True), registry=registry
            )

        assert exc_info.value.plugin == "expo-boom"

    def test_fallback_errors_propagate(self, registry) -> None:
        def boom(config, props=None):
            raise RuntimeError("fallback broke")

        with pytest.raises(UnitFailure) as exc_info:
            with_static_plugin({}, PluginReference("expo-missing", fallback=boom), registry=registry)

        assert exc_info.value.plugin == "expo-missing (fallback)"


class TestHistory:
    def test_optional_plugin_with_history_is_still_applied(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))
        config = add_history_item({}, "expo-camera", "1.0.0")

        out = with_static_plugin(
            config, PluginReference("expo-camera", fallback=noop_plugin, suppress_errors=True), registry=registry
        )

        assert calls == [("expo-camera", None)]
        assert out["applied"] == ["expo-camera"]

    def test_run_once_unit_skips_already_applied_plugin(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", create_run_once_plugin(recorder("expo-camera"), "expo-camera"))
        config = add_history_item({}, "expo-camera", "1.0.0")

        out = with_static_plugin(config, PluginReference("expo-camera", suppress_errors=True), registry=registry)

        assert calls == []
        assert "applied" not in out

    def test_required_plugin_ignores_history(self, registry, recorder, calls) -> None:
        registry.register("expo-camera", recorder("expo-camera"))
        config = add_history_item({}, "expo-camera")

        with_static_plugin(config, PluginReference("expo-camera"), registry=registry)

        assert len(calls) == 1


class TestStaticPluginUnit:
    def test_resolves_when_applied_not_when_built(self, registry, recorder) -> None:
        unit = static_plugin("expo-late", registry=registry)
        registry.register("expo-late", recorder("expo-late"))

        assert isinstance(unit, PluginUnit)
        assert unit.name == "expo-late"
        assert with_plugins({}, [unit])["applied"] == ["expo-late"]

    def test_entry_props_replace_default_props(self, registry, recorder, calls) -> None:
        registry.register("expo-updates", recorder("expo-updates"))
        unit = static_plugin("expo-updates", {"expoUsername": None}, registry=registry)

        with_plugins({}, [(unit, {"expoUsername": "bacon"})])

        assert calls == [("expo-updates", {"expoUsername": "bacon"})]

    def test_missing_required_plugin_stops_pipeline(self, registry, recorder, calls) -> None:
        registry.register("a", recorder("a"))
        registry.register("c", recorder("c"))

        with pytest.raises(PluginNotFoundError):
            with_plugins({}, [static_plugin(n, registry=registry) for n in ("a", "missing", "c")])

        assert [name for name, _ in calls] == ["a"]

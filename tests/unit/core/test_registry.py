# tests/unit/core/test_registry.py
"""Tests for pluggy-based plugin class discovery."""

import pluggy
import pytest

from txbench.core.registry import discover_registry

hookspec = pluggy.HookspecMarker("txbench")
hookimpl = pluggy.HookimplMarker("txbench")


class WidgetSpec:
    @hookspec
    def txbench_get_widgets(self) -> list[type]:  # type: ignore[empty-body]
        """Return widget classes."""


class RegistryError(Exception):
    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"{name}: {message}")


class Alpha:
    _name = "alpha"


class Beta:
    _name = "beta"


class Nameless:
    pass


def _plugin(*classes: type) -> object:
    class Plugin:
        @hookimpl
        def txbench_get_widgets(self) -> list[type]:
            return list(classes)

    return Plugin()


def _discover(*plugins: object) -> dict[str, type]:
    return discover_registry(WidgetSpec, "txbench_get_widgets", plugins, RegistryError)


def test_classes_keyed_by_name() -> None:
    registry = _discover(_plugin(Alpha), _plugin(Beta))

    assert registry == {"alpha": Alpha, "beta": Beta}


def test_no_plugins_gives_empty_registry() -> None:
    assert _discover() == {}


def test_duplicate_names_rejected() -> None:
    with pytest.raises(RegistryError, match="Duplicate plugin name 'alpha'"):
        _discover(_plugin(Alpha), _plugin(Alpha))


def test_missing_name_rejected() -> None:
    with pytest.raises(RegistryError, match="_name must be a non-empty string"):
        _discover(_plugin(Nameless))


def test_inherited_name_not_used() -> None:
    class Child(Alpha):
        pass

    with pytest.raises(RegistryError, match="Child"):
        _discover(_plugin(Child))


def test_non_iterable_hook_result_rejected() -> None:
    class BadPlugin:
        @hookimpl
        def txbench_get_widgets(self) -> str:
            return "alpha"

    with pytest.raises(RegistryError, match="must return an iterable"):
        _discover(BadPlugin())


def test_unknown_hook_rejected() -> None:
    class WrongHookPlugin:
        @hookimpl
        def txbench_get_gadgets(self) -> list[type]:
            return []

    with pytest.raises(RegistryError, match="Invalid plugin WrongHookPlugin"):
        _discover(WrongHookPlugin())

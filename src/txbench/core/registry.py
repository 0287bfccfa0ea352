# src/txbench/core/registry.py
"""pluggy-based discovery of named plugin classes.

Backends and measurement exporters are both discovered the same way: a
builtin plugin object plus any caller-supplied plugin objects register
hook implementations returning classes, and each class is keyed by its
`_name` class attribute.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import pluggy
import structlog

logger = structlog.get_logger(__name__)

PROJECT_NAME = "txbench"

# (name, message) -> exception to raise
ErrorFactory = Callable[[str, str], Exception]


def _resolve_name(plugin_class: type, error: ErrorFactory) -> str:
    class_name = getattr(plugin_class, "__name__", repr(plugin_class))
    name = plugin_class.__dict__.get("_name")
    if type(name) is not str or name == "":
        raise error(class_name, f"Plugin class attribute _name must be a non-empty string, got {name!r}")
    return name


def discover_registry(
    spec: type,
    hook_name: str,
    plugins: Iterable[Any],
    error: ErrorFactory,
) -> dict[str, type]:
    """Build a name -> class registry from pluggy hook implementations.

    Args:
        spec: Hook specification class to register
        hook_name: Name of the hook that returns plugin classes
        plugins: Plugin objects implementing the hook (builtins first)
        error: Factory for the exception raised on invalid plugins

    Returns:
        Mapping of plugin name to plugin class.

    Raises:
        Whatever `error` builds: on plugin validation failures, hooks that
            don't return an iterable of classes, or duplicate names.
    """
    plugin_manager = pluggy.PluginManager(PROJECT_NAME)
    plugin_manager.add_hookspecs(spec)

    for plugin in plugins:
        try:
            plugin_manager.register(plugin)
            plugin_manager.check_pending()
        except (pluggy.PluginValidationError, ValueError) as e:
            if isinstance(e, pluggy.PluginValidationError):
                plugin_manager.unregister(plugin=plugin)
            raise error("plugins", f"Invalid plugin {type(plugin).__name__}: {e}") from e

    registry: dict[str, type] = {}
    hook = getattr(plugin_manager.hook, hook_name)
    for hook_impl in hook.get_hookimpls():
        plugin_name = type(hook_impl.plugin).__name__
        classes = hook_impl.function()
        if classes is None or isinstance(classes, (str, bytes)):
            raise error("plugins", f"{hook_name} in plugin {plugin_name} must return an iterable of classes, got {classes!r}")

        for plugin_class in classes:
            name = _resolve_name(plugin_class, error)
            if name in registry:
                raise error(
                    name,
                    f"Duplicate plugin name '{name}' discovered: {registry[name].__name__} and {plugin_class.__name__}",
                )
            registry[name] = plugin_class

    logger.debug("plugin_registry_built", hook=hook_name, names=sorted(registry))
    return registry

"""Language plugin discovery and loading.

A language plugin is a module exposing ``register(registry)``, which adds one
or more handlers to the ``LanguageRegistry`` it is given. Plugins are found
three ways:

- listed by name in ``[plugins] enabled_plugins``
- installed packages advertising an ``asmlex.languages`` entry point
- with ``auto_discover``, top-level modules whose name starts with one of the
  configured prefixes (``asmlex_lang`` by default), searched in
  ``plugin_dirs`` and then on ``sys.path``
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import sys
from contextlib import contextmanager
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Iterable, Iterator

from .schema import AsmlexConfig, PluginsConfig

if TYPE_CHECKING:
    from .registry import LanguageRegistry

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_PREFIX = "asmlex_lang"
ENTRY_POINT_GROUP = "asmlex.languages"
REGISTER_HOOK = "register"


def _plugins_config(config: AsmlexConfig | PluginsConfig | dict | None) -> PluginsConfig:
    if isinstance(config, PluginsConfig):
        return config
    if isinstance(config, AsmlexConfig):
        return config.plugins
    if isinstance(config, dict):
        return PluginsConfig.from_dict(config.get("plugins", config))
    return PluginsConfig()


def _prefixed_modules(prefixes: list[str], paths: list[Path] | None) -> set[str]:
    """Names of top-level modules under ``paths`` (or sys.path) matching a prefix."""
    search = None if paths is None else [str(path) for path in paths if path.is_dir()]
    if search == []:
        return set()
    return {
        module.name
        for module in pkgutil.iter_modules(search)
        if module.name.startswith(tuple(prefixes))
    }


def _entry_point_modules() -> set[str]:
    return {entry.module for entry in entry_points(group=ENTRY_POINT_GROUP)}


@contextmanager
def _plugin_import_path(dirs: list[Path]) -> Iterator[None]:
    """Temporarily put existing plugin directories ahead of sys.path."""
    added = [str(path) for path in dirs if path.is_dir()]
    saved = list(sys.path)
    sys.path[:0] = added
    try:
        yield
    finally:
        sys.path[:] = saved


def discover_plugins(
    config: AsmlexConfig | PluginsConfig | dict | None = None,
    extra_paths: Iterable[Path] | None = None,
) -> list[str]:
    """Return the sorted names of language plugin modules to load."""
    plugins_config = _plugins_config(config)
    names = set(plugins_config.enabled_plugins)
    names.update(_entry_point_modules())

    if plugins_config.auto_discover:
        prefixes = plugins_config.auto_discover_prefixes or [DEFAULT_PLUGIN_PREFIX]
        dirs = list(plugins_config.plugin_dirs) + list(extra_paths or [])
        if dirs:
            names.update(_prefixed_modules(prefixes, dirs))
        names.update(_prefixed_modules(prefixes, None))

    return sorted(names)


def _register_hook(module: ModuleType):
    hook = getattr(module, REGISTER_HOOK, None)
    return hook if callable(hook) else None


def load_plugins(
    plugin_names: Iterable[str],
    plugin_dirs: Iterable[Path] | None = None,
) -> dict[str, ModuleType]:
    """Import plugin modules, keeping only those with a ``register`` hook."""
    loaded: dict[str, ModuleType] = {}
    with _plugin_import_path(list(plugin_dirs or [])):
        for name in plugin_names:
            try:
                module = importlib.import_module(name)
            except Exception as exc:
                logger.warning("Failed to load plugin %s: %s", name, exc)
                continue
            if _register_hook(module) is None:
                logger.warning("Plugin %s has no register() hook", name)
                continue
            loaded[name] = module
    return loaded


def register_plugins(
    registry: LanguageRegistry,
    plugins: Iterable[ModuleType],
) -> list[str]:
    """Call each plugin's ``register`` hook; return the names that succeeded."""
    registered: list[str] = []
    for module in plugins:
        name = getattr(module, "__name__", repr(module))
        hook = _register_hook(module)
        if hook is None:
            logger.warning("Plugin %s has no register() hook", name)
            continue
        try:
            hook(registry)
        except Exception as exc:
            logger.warning("Plugin %s failed to register: %s", name, exc)
            continue
        registered.append(name)
    return registered


def load_enabled_plugins(
    config: AsmlexConfig | PluginsConfig | dict | None = None,
) -> dict[str, ModuleType]:
    """Discover and import the plugins enabled by ``config``."""
    plugins_config = _plugins_config(config)
    names = discover_plugins(plugins_config)
    return load_plugins(names, plugins_config.plugin_dirs)

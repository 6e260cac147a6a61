"""Plugin discovery, loading, and hook dispatch.

Discovery: the ``adrscope.plugins`` entry-point group via pluggy, plus
single-file plugins in a local directory (``.adrscope/plugins/``).
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

import pluggy

from adrscope.plugins.hookspecs import AdrscopeHookSpec

if TYPE_CHECKING:
    from adrscope.domain.validation import ValidationRule

PROJECT_NAME = "adrscope"
ENTRY_POINT_GROUP = "adrscope.plugins"
LOCAL_PLUGIN_DIR = Path(".adrscope") / "plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AdrscopeHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Hook helpers
    # ------------------------------------------------------------------

    def collect_validation_rules(self) -> tuple[list[ValidationRule], list[str]]:
        """Gather plugin-contributed rules.

        Returns ``(rules, warnings)``.  A plugin that raises or returns
        something other than a list of rules is skipped with a warning.
        """
        from adrscope.domain.validation import ValidationRule

        rules: list[ValidationRule] = []
        warnings: list[str] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_validation_rules", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                contributed = hook()
            except Exception:
                logger.warning("Plugin %s failed to register rules", plugin_name, exc_info=True)
                warnings.append(f"Plugin {plugin_name} failed to register validation rules")
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, (list, tuple)):
                warnings.append(
                    f"Plugin {plugin_name} returned {type(contributed).__name__}, "
                    "expected a list of validation rules"
                )
                continue
            for rule in contributed:
                if isinstance(rule, ValidationRule):
                    rules.append(rule)
                else:
                    warnings.append(f"Plugin {plugin_name} returned an invalid rule: {rule!r}")
        return rules, warnings

    def notify(self, hook_name: str, warnings: list[str], /, **kwargs: Any) -> None:
        """Call a notification hook; failures become entries in *warnings*."""
        caller = getattr(self._pm.hook, hook_name)
        try:
            caller(**kwargs)
        except Exception:
            logger.debug("Hook dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Register every plugin class found in ``*.py`` files under *local_dir*.

        ``_``-prefixed files are ignored.  A file that fails to import, or a
        class that fails to instantiate, is logged and skipped.
        """
        if not local_dir.is_dir():
            return
        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module = _import_file(py_file)
            if module is None:
                continue
            for cls in _plugin_classes(module):
                name = f"{module.__name__}.{cls.__name__}"
                try:
                    instance = cls()
                except Exception:
                    logger.warning("Cannot instantiate %s from %s", name, py_file, exc_info=True)
                    continue
                self.register_plugin(instance, name=name)

    def _normalize_plugin_instances(self) -> None:
        """Swap classes registered straight from entry points for instances.

        pluggy calls hooks on whatever object was registered; a bare class
        would leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not (inspect.isclass(plugin) and _has_hook_impls(plugin)):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=plugin_name)
            except Exception:
                logger.warning(
                    "Cannot instantiate entry-point plugin %s", plugin_name, exc_info=True
                )


def _import_file(py_file: Path) -> ModuleType | None:
    """Import a standalone plugin file under a private module name."""
    module_name = f"adrscope_local_plugin_{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Not an importable plugin file: %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        del sys.modules[module_name]
        return None
    return module


def _plugin_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* (not imported into it) that carry hook impls."""
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__ and _has_hook_impls(obj)
    ]


def _has_hook_impls(cls: type) -> bool:
    """Whether any public attribute of *cls* is marked with ``@hookimpl``.

    pluggy's ``HookimplMarker("adrscope")`` tags marked functions with an
    ``adrscope_impl`` attribute.
    """
    return any(
        callable(member) and getattr(member, f"{PROJECT_NAME}_impl", None)
        for name, member in inspect.getmembers(cls)
        if not name.startswith("_")
    )

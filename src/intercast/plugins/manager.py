"""Plugin discovery and loading.

Discovery: the ``intercast.plugins`` entry point group via pluggy's
setuptools loader. Plugins contribute filter types through the
``register_filter_types`` hook; each returned rule is added to the type
registry.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from intercast.domain.registry import TypeRule, register_type
from intercast.plugins.hookspecs import IntercastHookSpec

PROJECT_NAME = "intercast"
ENTRY_POINT_GROUP = "intercast.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and filter type registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(IntercastHookSpec)
        self._loaded: bool = False
        self._registered_tags: list[str] = []

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and register their filter types.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._register_plugin_types(plugin, self._plugin_name(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly.

        Filter types are collected immediately when plugins were already
        loaded, otherwise on the next :meth:`discover_and_load`.
        """
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_types(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def registered_tags(self) -> list[str]:
        """Filter type tags added by plugins through this manager."""
        return list(self._registered_tags)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._plugin_name(p) for p in self._pm.get_plugins()]

    def _plugin_name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hook calls
        against a class leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    def _register_plugin_types(self, plugin: object, plugin_name: str) -> None:
        """Register filter types exposed by a single plugin instance."""
        hook = getattr(plugin, "register_filter_types", None)
        if hook is None:
            return

        try:
            rules = hook()
        except Exception:
            logger.warning(
                "Failed to collect filter types from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return

        if rules is None:
            return
        if not isinstance(rules, list | tuple):
            logger.warning("Plugin %s returned non-list filter type registrations", plugin_name)
            return

        for rule in rules:
            if not isinstance(rule, TypeRule):
                logger.warning("Skipping non-TypeRule registration from plugin %s", plugin_name)
                continue
            try:
                register_type(rule)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping filter type %r from plugin %s",
                    rule.tag,
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._registered_tags.append(rule.tag)

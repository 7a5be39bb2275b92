"""
Plugin Registry

PluginRegistry: the plugins available on this system, whether enabled or
not. Whether a plugin is enabled is persisted state (the plugin table) and
is decided by the hook loader, not here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hostpanel.exceptions import ConfigurationError
from hostpanel.plugins.base import PluginBase
from hostpanel.utils.imports import import_string

if TYPE_CHECKING:
    from hostpanel.config import Settings

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Available plugins by name, in registration order."""

    def __init__(self) -> None:
        self._plugins: dict[str, PluginBase] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> PluginRegistry:
        """Instantiate the plugin classes named in settings.plugins."""
        registry = cls()
        for path in settings.plugins:
            plugin_class = import_string(path)
            if not (isinstance(plugin_class, type) and issubclass(plugin_class, PluginBase)):
                raise ConfigurationError(f"'{path}' is not a PluginBase subclass", setting=path)
            registry.register(plugin_class())
        return registry

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register an available plugin."""
        name = plugin.meta.name
        if name in self._plugins:
            raise ConfigurationError(f"Plugin already registered: {name}", setting=name)
        self._plugins[name] = plugin
        logger.info("Plugin available: %s v%s", name, plugin.meta.version)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def names(self) -> list[str]:
        return list(self._plugins)

    def is_registered(self, name: str) -> bool:
        return name in self._plugins

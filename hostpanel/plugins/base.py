"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, description).
PluginBase: abstract base class all plugins must subclass.

A plugin takes part in setup runs by defining the optional operation

    register_setup_listeners(events) -> int | None

which receives the run's EventManager and registers listeners on any
setup event. It is deliberately absent from PluginBase: plugins that do
not define it are skipped by the hook loader.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:        Machine-readable name, matches plugin.plugin_name in the database.
        version:     Semver string, e.g. "1.0.0".
        description: Human-readable description.
        author:      Plugin author.
        backend:     True when the plugin ships a backend part converged by the
                     task processor.
    """

    name: str
    version: str
    description: str = ""
    author: str = "hostpanel team"
    backend: bool = False


class PluginBase(ABC):
    """Abstract base class for all hostpanel plugins."""

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    @property
    def name(self) -> str:
        return self.meta.name

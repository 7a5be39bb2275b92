"""
hostpanel plugin system

    PluginMeta        — plugin metadata dataclass
    PluginBase        — abstract base class for all plugins
    PluginRegistry    — available plugins
    PluginHookLoader  — registers enabled plugins' setup listeners
"""

from .base import PluginBase, PluginMeta
from .loader import PluginHookLoader, get_enabled_plugin_names
from .registry import PluginRegistry

__all__ = ["PluginBase", "PluginHookLoader", "PluginMeta", "PluginRegistry", "get_enabled_plugin_names"]

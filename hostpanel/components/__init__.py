"""
hostpanel components

    ComponentRegistry    — ordered servers/packages for a setup run
    invoke_if_supported  — capability-probing dispatcher
    Phase                — setup phases in execution order
"""

from .base import ComponentCategory, Phase, component_name, component_priority
from .dispatcher import DispatchResult, invoke_if_supported, supports
from .registry import ComponentRegistry

__all__ = [
    "ComponentCategory",
    "ComponentRegistry",
    "DispatchResult",
    "Phase",
    "component_name",
    "component_priority",
    "invoke_if_supported",
    "supports",
]

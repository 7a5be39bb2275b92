"""
hostpanel event system

    EventManager  — per-run listener registry and dispatcher
    Registration  — handle returned by EventManager.register()
    phase_event   — builds before/after phase event names
"""

from .hooks import phase_event
from .manager import EventManager, Registration

__all__ = ["EventManager", "Registration", "phase_event"]

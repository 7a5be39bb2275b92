"""
Component Conventions

Servers and packages do not share a base class. A component is any object
exposing some subset of the lifecycle operations below; the dispatcher
probes for each operation before calling it.

Optional operations:
    preinstall(), install(), postinstall(), uninstall()
        Return None/0 on success, a non-zero status or raise on failure.
    register_setup_listeners(events)
        Register listeners on the run's EventManager.
    register_convergence_handlers(handlers)
        Contribute convergence handlers for managed tables.

Optional attributes:
    name      Identity of the component (defaults to the class name).
    priority  Rank among peers, higher first (defaults to 0).
"""

from __future__ import annotations

import enum
from typing import Any


class ComponentCategory(str, enum.Enum):
    SERVER = "server"
    PACKAGE = "package"


class Phase(str, enum.Enum):
    """Setup phases, in execution order. Values are the operation names."""

    PRE_INSTALL = "preinstall"
    INSTALL = "install"
    POST_INSTALL = "postinstall"

    @property
    def label(self) -> str:
        return {"preinstall": "PreInstall", "install": "Install", "postinstall": "PostInstall"}[self.value]


UNINSTALL = "uninstall"


def component_name(component: Any) -> str:
    """Return the identity of a component."""
    name = getattr(component, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(component).__name__


def component_priority(component: Any) -> int:
    """Return the rank of a component among its peers."""
    priority = getattr(component, "priority", 0)
    if callable(priority):
        priority = priority()
    return int(priority or 0)

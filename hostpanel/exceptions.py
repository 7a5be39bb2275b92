"""
Custom Exception Classes for hostpanel

This module defines the exception hierarchy shared by the setup driver,
the event manager, the plugin hook loader and the task processor.

Failure policy:
    ComponentFailure / ListenerError  -> fatal to the current setup run
    ConvergenceError                  -> isolated to one entity row
    DatabaseError                     -> fatal, aborts all further processing
"""

from typing import Any

from fastapi import status


class HostPanelError(Exception):
    """Base exception class for all hostpanel exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(HostPanelError):
    """Raised when components, plugins or settings are misconfigured"""

    def __init__(self, message: str, setting: str | None = None):
        details = {"setting": setting} if setting else {}
        super().__init__(message=message, details=details)


class StatusModelError(ConfigurationError):
    """Raised when a managed table declares an inconsistent status model"""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(message=f"Invalid status model for table '{table}': {message}")
        self.details["table"] = table


# ============================================================================
# Setup Exceptions
# ============================================================================


class ComponentError(HostPanelError):
    """Raised by a component operation to report a human-readable failure"""

    def __init__(self, message: str, component: str | None = None):
        details = {"component": component} if component else {}
        super().__init__(message=message, details=details)


class ComponentFailure(HostPanelError):
    """Raised when a component phase operation fails during a setup run"""

    def __init__(self, component: str, phase: str, reason: str):
        self.component = component
        self.phase = phase
        self.reason = reason
        super().__init__(
            message=f"{component} {phase} tasks failed: {reason}",
            details={"component": component, "phase": phase, "reason": reason},
        )


class ListenerError(HostPanelError):
    """Raised when an event listener returns a non-zero outcome or raises"""

    def __init__(self, event: str, code: int = 1, reason: str | None = None):
        self.event = event
        self.code = code
        message = f"Listener for event '{event}' failed with status {code}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, details={"event": event, "code": code})


class PluginLoadError(HostPanelError):
    """Raised when a plugin cannot register its setup listeners"""

    def __init__(self, plugin: str, reason: str):
        self.plugin = plugin
        super().__init__(
            message=f"Plugin '{plugin}' could not register its setup listeners: {reason}",
            details={"plugin": plugin},
        )


class StepError(HostPanelError):
    """Raised when a step of a step sequence fails"""

    def __init__(self, index: int, total: int, label: str, reason: str):
        self.index = index
        self.total = total
        self.label = label
        super().__init__(
            message=f"Step {index}/{total} ({label}) failed: {reason}",
            details={"index": index, "total": total, "label": label},
        )


class ServiceError(HostPanelError):
    """Raised when a system service cannot be managed"""

    def __init__(self, message: str, service: str | None = None):
        details = {"service": service} if service else {}
        super().__init__(message=message, details=details)


# ============================================================================
# Reconciliation & Database Exceptions
# ============================================================================


class ConvergenceError(HostPanelError):
    """Raised by a convergence handler when an entity cannot be converged"""

    def __init__(self, message: str, table: str | None = None, entity_id: Any | None = None):
        details: dict[str, Any] = {}
        if table:
            details["table"] = table
        if entity_id is not None:
            details["entity_id"] = entity_id
        super().__init__(message=message, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, details=details)


class DatabaseError(HostPanelError):
    """Raised when the entity store cannot be read or written"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)


class AdminAuthenticationError(HostPanelError):
    """Raised when the admin command surface is called without a valid token"""

    def __init__(self, message: str = "Invalid or missing admin token"):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED)

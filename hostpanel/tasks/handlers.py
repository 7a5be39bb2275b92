"""
Convergence Handlers

ConvergenceHandlers: maps a managed table name to the function applying
the real-world effect of one row's pending status.

Handler contract:
    handler(db, row, status) -> None   (sync or async)

    Raise (preferably ConvergenceError) with a human-readable message when
    the row cannot be converged. Handlers must be idempotent: a row left
    in error is retried from scratch once an operator requeues it. For a
    'todelete' row the handler deletes the row itself.

Servers and packages contribute handlers through an optional
``register_convergence_handlers(handlers)`` operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from hostpanel.components.base import component_name
from hostpanel.components.dispatcher import failure_reason, invoke_if_supported
from hostpanel.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ConvergenceHandler = Callable[..., Any]


class ConvergenceHandlers:
    """Registry of convergence handlers, one per managed table."""

    def __init__(self, handlers: dict[str, ConvergenceHandler] | None = None) -> None:
        self._handlers: dict[str, ConvergenceHandler] = {}
        for table, handler in (handlers or {}).items():
            self.register(table, handler)

    def register(self, table: str, handler: ConvergenceHandler, *, replace: bool = False) -> None:
        if not callable(handler):
            raise ConfigurationError(f"Convergence handler for '{table}' is not callable", setting=table)
        if table in self._handlers and not replace:
            raise ConfigurationError(f"A convergence handler is already registered for '{table}'", setting=table)
        self._handlers[table] = handler
        logger.debug("Convergence handler registered for %s", table)

    def get(self, table: str) -> ConvergenceHandler | None:
        return self._handlers.get(table)

    def tables(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, table: str) -> bool:
        return table in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


async def collect_handlers(components: Iterable[Any], handlers: ConvergenceHandlers | None = None) -> ConvergenceHandlers:
    """Let every component that supports it contribute its handlers."""
    handlers = handlers if handlers is not None else ConvergenceHandlers()
    for component in components:
        result = await invoke_if_supported(component, "register_convergence_handlers", handlers)
        if result.outcome:
            reason = failure_reason(result.outcome)
            raise ConfigurationError(f"{component_name(component)} failed to register its convergence handlers: {reason}")
    return handlers

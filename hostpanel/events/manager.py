"""
Event Manager

EventManager: per-run registry of event listeners and their dispatcher.

Listeners are ordered by ascending priority; listeners sharing a priority
fire in registration order. A listener returns None or 0 to let dispatch
continue. The first non-zero outcome stops dispatch and is handed back to
the caller, which treats it as a failure of the action guarded by the event.

Payload objects are passed by reference, so a listener may append work
(e.g. extra steps) to a list supplied by the code that triggers the event.
"""

from __future__ import annotations

import inspect
import itertools
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from hostpanel.exceptions import ListenerError

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


@dataclass(frozen=True)
class Registration:
    """Handle returned by EventManager.register()."""

    event: str
    priority: int
    sequence: int
    listener: Listener = field(compare=False)
    once: bool = False


class EventManager:
    """
    Event listener registry for a single setup or reconciliation run.

    Construct one instance per run and pass it explicitly to every
    subsystem that triggers or listens to events.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Registration]] = defaultdict(list)
        self._sequence = itertools.count()

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, event: str, listener: Listener, priority: int = 0, *, once: bool = False) -> Registration:
        """Register `listener` on `event`. Lower priorities fire first."""
        if not callable(listener):
            raise TypeError(f"Listener for event '{event}' is not callable")
        registration = Registration(event, priority, next(self._sequence), listener, once)
        self._listeners[event].append(registration)
        logger.debug("Listener registered on %s (priority=%d)", event, priority)
        return registration

    def register_one(self, event: str, listener: Listener, priority: int = 0) -> Registration:
        """Register a listener that is removed after it fires once."""
        return self.register(event, listener, priority, once=True)

    def unregister(self, registration: Registration) -> bool:
        """Remove a registration. Returns False if it was already gone."""
        listeners = self._listeners.get(registration.event, [])
        for index, candidate in enumerate(listeners):
            if candidate.sequence == registration.sequence:
                del listeners[index]
                return True
        return False

    def has_listeners(self, event: str) -> bool:
        return bool(self._listeners.get(event))

    def listeners(self, event: str) -> list[Registration]:
        """Return the registrations for `event` in firing order."""
        return sorted(self._listeners.get(event, []), key=lambda r: (r.priority, r.sequence))

    # ── Dispatch ──────────────────────────────────────────────────────────────

    async def trigger(self, event: str, *payload: Any) -> int:
        """
        Fire `event`, passing `payload` to every listener.

        The listener list is captured before the first listener runs:
        listeners registered while dispatching only see later triggers.

        Returns:
            0 when every listener succeeded, otherwise the first non-zero
            outcome.

        Raises:
            ListenerError: a listener raised an exception or returned a
                non-integer failure (e.g. an error message).
        """
        snapshot = self.listeners(event)
        if not snapshot:
            return 0

        logger.debug("Triggering %s (%d listeners)", event, len(snapshot))
        for registration in snapshot:
            if registration.once:
                self.unregister(registration)
            try:
                outcome = registration.listener(*payload)
                if inspect.isawaitable(outcome):
                    outcome = await outcome
            except Exception as exc:
                logger.error("Listener for %s raised: %s", event, exc, extra={"event": event})
                raise ListenerError(event, reason=str(exc) or type(exc).__name__) from exc

            if not outcome:
                continue
            logger.error("Listener for %s returned %s", event, outcome, extra={"event": event})
            if not isinstance(outcome, int):
                # A message instead of a status code
                raise ListenerError(event, 1, reason=str(outcome))
            return int(outcome)
        return 0

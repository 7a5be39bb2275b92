"""
Phase Driver

Runs the setup phases (PreInstall, Install, PostInstall) across all server
components and then all package components, in registry order.

Each phase is bracketed by events:

    before<Phase>Servers -> servers -> after<Phase>Servers
    before<Phase>Packages -> packages -> after<Phase>Packages

The first failure, of a component or of a listener, aborts the whole run:
no further component, event or phase runs. Nothing is rolled back;
components must tolerate being set up again.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from typing import Any

from hostpanel.components.base import UNINSTALL, Phase, component_name
from hostpanel.components.dispatcher import failure_reason, invoke_if_supported, supports
from hostpanel.components.registry import ComponentRegistry
from hostpanel.events.hooks import phase_event
from hostpanel.events.manager import EventManager
from hostpanel.exceptions import ComponentFailure, HostPanelError, ListenerError
from hostpanel.utils.logging import step_context
from hostpanel.utils.progress import ProgressReporter, log_progress

logger = logging.getLogger(__name__)

SERVERS = "Servers"
PACKAGES = "Packages"


class DriverState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class PhaseDriver:
    """Sequences the registry's components through the setup phases."""

    PHASES: tuple[Phase, ...] = (Phase.PRE_INSTALL, Phase.INSTALL, Phase.POST_INSTALL)

    def __init__(
        self,
        registry: ComponentRegistry,
        events: EventManager,
        progress: ProgressReporter | None = None,
    ) -> None:
        self.registry = registry
        self.events = events
        self.progress = progress or log_progress
        self.state = DriverState.IDLE
        self.failure: HostPanelError | None = None

    async def run(self) -> None:
        """
        Run every phase over every component.

        Raises:
            ComponentFailure: a component operation failed.
            ListenerError: a phase event listener failed.
        """
        servers = self.registry.list_servers()
        packages = self.registry.list_packages()
        await self._drive(
            [(phase.value, phase.label) for phase in self.PHASES],
            [(SERVERS, servers), (PACKAGES, packages)],
        )

    async def uninstall(self) -> None:
        """
        Run the uninstall operation of every component.

        Packages are uninstalled before servers, each category in reverse
        registry order. Same failure rules as run().
        """
        servers = tuple(reversed(self.registry.list_servers()))
        packages = tuple(reversed(self.registry.list_packages()))
        await self._drive([(UNINSTALL, "Uninstall")], [(PACKAGES, packages), (SERVERS, servers)])

    # ── Internals ─────────────────────────────────────────────────────────────

    async def _drive(
        self,
        stages: Sequence[tuple[str, str]],
        groups: Sequence[tuple[str, Sequence[Any]]],
    ) -> None:
        self.state = DriverState.RUNNING
        self.failure = None
        try:
            for operation, label in stages:
                await self._run_stage(operation, label, groups)
        except (ComponentFailure, ListenerError) as exc:
            self.state = DriverState.FAILED
            self.failure = exc
            logger.error("Setup aborted: %s", exc.message)
            raise
        self.state = DriverState.COMPLETED

    async def _run_stage(self, operation: str, label: str, groups: Sequence[tuple[str, Sequence[Any]]]) -> None:
        total = sum(len(components) for _, components in groups)
        index = 1
        for category, components in groups:
            await self._fire(phase_event("before", label, category))
            for component in components:
                await self._dispatch(component, operation, label, index, total)
                index += 1
            await self._fire(phase_event("after", label, category))

    async def _dispatch(self, component: Any, operation: str, label: str, index: int, total: int) -> None:
        if not supports(component, operation):
            return

        name = component_name(component)
        step_label = f"Executing {name} {operation} tasks..."
        self.progress(index, total, step_label)
        with step_context(step_label):
            try:
                result = await invoke_if_supported(component, operation)
            except HostPanelError as exc:
                raise ComponentFailure(name, label, exc.message) from exc
            except Exception as exc:
                raise ComponentFailure(name, label, str(exc) or type(exc).__name__) from exc

        if result.outcome:
            raise ComponentFailure(name, label, failure_reason(result.outcome))

    async def _fire(self, event: str) -> None:
        code = await self.events.trigger(event)
        if code:
            raise ListenerError(event, code)

"""
Setup Runner

Sequences a complete setup run:

    1. Creating database schema
    2. Registering component setup listeners
    3. Registering plugin setup listeners
    4. Processing servers/packages          (PhaseDriver)
    5. Processing DB tasks                  (TaskProcessor)
    6. Restarting services

Listeners of ``beforeSetupTasks`` receive the step list and may append
their own steps. The run stops at the first failing step.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hostpanel.components.base import component_name
from hostpanel.components.dispatcher import failure_reason, invoke_if_supported
from hostpanel.components.registry import ComponentRegistry
from hostpanel.config import Settings
from hostpanel.database import create_schema
from hostpanel.events import hooks
from hostpanel.events.manager import EventManager
from hostpanel.exceptions import ComponentError, ListenerError
from hostpanel.plugins.loader import PluginHookLoader, get_enabled_plugin_names
from hostpanel.plugins.registry import PluginRegistry
from hostpanel.setup.phases import PhaseDriver
from hostpanel.setup.services import ServiceManager, SystemdServiceManager, register_core_restarts, restart_services
from hostpanel.setup.stepper import Step, run_steps
from hostpanel.tasks.handlers import ConvergenceHandlers, collect_handlers
from hostpanel.tasks.processor import TaskProcessor, TaskSummary
from hostpanel.utils.progress import ProgressReporter, log_progress

logger = logging.getLogger(__name__)


class SetupRunner:
    """Runs the full setup sequence against one database session."""

    def __init__(
        self,
        settings: Settings,
        db: AsyncSession,
        registry: ComponentRegistry,
        plugins: PluginRegistry,
        events: EventManager | None = None,
        handlers: ConvergenceHandlers | None = None,
        services: ServiceManager | None = None,
        progress: ProgressReporter | None = None,
    ):
        self.settings = settings
        self.db = db
        self.registry = registry
        self.plugins = plugins
        self.events = events or EventManager()
        self.handlers = handlers or ConvergenceHandlers()
        self.services = services or SystemdServiceManager()
        self.progress = progress or log_progress
        self.driver = PhaseDriver(registry, self.events, self.progress)
        self.db_tasks: TaskSummary | None = None

    def steps(self) -> list[Step]:
        steps = [
            Step(self.setup_database, "Creating database schema"),
            Step(self.register_component_listeners, "Registering component setup listeners"),
            Step(self.register_plugin_listeners, "Registering plugin setup listeners"),
            Step(self.driver.run, "Processing servers/packages"),
            Step(self.process_db_tasks, "Processing DB tasks"),
        ]
        if self.settings.restart_services:
            steps.append(Step(self.restart_services, "Restarting services"))
        return steps

    async def run(self) -> None:
        """
        Run every setup step.

        Raises:
            StepError: a step failed; chained to the underlying error.
            ListenerError: a beforeSetupTasks/afterSetupTasks listener failed.
        """
        steps = self.steps()
        await self._fire(hooks.BEFORE_SETUP_TASKS, steps)
        await run_steps(steps, self.progress)
        await self._fire(hooks.AFTER_SETUP_TASKS)
        logger.info("Setup completed")

    # ============== Steps ==============

    async def setup_database(self) -> None:
        await create_schema(self.db)

    async def register_component_listeners(self) -> None:
        for component in self.registry.all_components():
            result = await invoke_if_supported(component, "register_setup_listeners", self.events)
            if result.outcome:
                name = component_name(component)
                raise ComponentError(
                    f"{name} failed to register its setup listeners: {failure_reason(result.outcome)}", component=name
                )

    async def register_plugin_listeners(self) -> None:
        await self._fire(hooks.BEFORE_REGISTER_PLUGIN_LISTENERS)
        enabled = await get_enabled_plugin_names(self.db)
        await PluginHookLoader(self.plugins, self.events).load(enabled)
        await self._fire(hooks.AFTER_REGISTER_PLUGIN_LISTENERS)

    async def process_db_tasks(self) -> None:
        await self._fire(hooks.BEFORE_SETUP_DB_TASKS)
        await collect_handlers(self.registry.all_components(), self.handlers)
        processor = TaskProcessor(self.db, self.handlers, progress=self.progress)
        await processor.requeue_for_setup()
        self.db_tasks = await processor.process_pending()
        await self._fire(hooks.AFTER_SETUP_DB_TASKS)

    async def restart_services(self) -> None:
        register_core_restarts(self.events, self.services)
        await restart_services(self.events, self.progress)

    async def _fire(self, event: str, *payload) -> None:
        code = await self.events.trigger(event, *payload)
        if code:
            raise ListenerError(event, code)

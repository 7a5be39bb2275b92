"""
Admin Service

Entry points shared by the command line and the HTTP admin routes:
building a run's collaborators from settings, running setup, uninstalling
components and processing pending DB tasks.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hostpanel.components.registry import ComponentRegistry
from hostpanel.config import Settings
from hostpanel.events.manager import EventManager
from hostpanel.exceptions import ComponentFailure, HostPanelError, StepError
from hostpanel.plugins.registry import PluginRegistry
from hostpanel.setup.phases import PhaseDriver
from hostpanel.setup.runner import SetupRunner
from hostpanel.setup.services import ServiceManager
from hostpanel.tasks.handlers import collect_handlers
from hostpanel.tasks.processor import TaskProcessor, TaskSummary
from hostpanel.utils.progress import ProgressReporter

logger = logging.getLogger(__name__)


def describe_failure(exc: HostPanelError) -> dict:
    """Flatten a setup failure into the step, phase and component it stopped at."""
    report: dict = {"message": exc.message}
    if isinstance(exc, StepError):
        report.update(step=exc.label, step_index=exc.index, step_total=exc.total)
    cause: BaseException | None = exc
    while cause is not None:
        if isinstance(cause, ComponentFailure):
            report.update(phase=cause.phase, component=cause.component, reason=cause.reason)
            break
        cause = cause.__cause__
    return report


class AdminService:
    """Runs setup and reconciliation for the admin command surface."""

    def __init__(self, db: AsyncSession, settings: Settings, services: ServiceManager | None = None):
        self.db = db
        self.settings = settings
        self.services = services

    def build_registry(self) -> ComponentRegistry:
        return ComponentRegistry.from_settings(self.settings)

    def build_plugins(self) -> PluginRegistry:
        return PluginRegistry.from_settings(self.settings)

    async def run_setup(self, progress: ProgressReporter | None = None) -> SetupRunner:
        """Run the full setup sequence. Raises StepError on failure."""
        runner = SetupRunner(
            self.settings,
            self.db,
            self.build_registry(),
            self.build_plugins(),
            events=EventManager(),
            services=self.services,
            progress=progress,
        )
        await runner.run()
        return runner

    async def run_uninstall(self, progress: ProgressReporter | None = None) -> None:
        """Run every component's uninstall operation."""
        driver = PhaseDriver(self.build_registry(), EventManager(), progress)
        await driver.uninstall()

    async def process_tasks(self, progress: ProgressReporter | None = None) -> TaskSummary:
        """Converge every pending entity row."""
        registry = self.build_registry()
        handlers = await collect_handlers(registry.all_components())
        summary = await TaskProcessor(self.db, handlers, progress=progress).process_pending()
        logger.info("Reconciliation finished: %d processed, %d failed", summary.processed, summary.failed)
        return summary

"""
Service Restarts

The last setup step restarts the services whose configuration may have
changed. The list of restarts is not fixed: it is collected by firing
``beforeSetupRestartServices`` with an empty list, to which any listener
(core, component or plugin) appends ``Step`` objects.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - systemctl is the service manager interface
from typing import Protocol

from hostpanel.events.hooks import AFTER_RESTART_SERVICES, BEFORE_RESTART_SERVICES
from hostpanel.events.manager import EventManager
from hostpanel.exceptions import ListenerError, ServiceError
from hostpanel.setup.stepper import Step, run_steps
from hostpanel.utils.progress import ProgressReporter

logger = logging.getLogger(__name__)

# (service, action, label, listener priority)
CORE_SERVICES: tuple[tuple[str, str, str, int], ...] = (
    ("hostpanel_mountall", "restart", "hostpanel mounts", 999),
    ("hostpanel_traffic", "restart", "hostpanel traffic logger", 99),
    ("hostpanel_daemon", "start", "hostpanel daemon", 99),
)


class ServiceManager(Protocol):
    def start(self, service: str) -> None: ...

    def stop(self, service: str) -> None: ...

    def restart(self, service: str) -> None: ...

    def enable(self, service: str) -> None: ...

    def is_enabled(self, service: str) -> bool: ...


class SystemdServiceManager:
    """Manages services through systemctl."""

    def __init__(self, systemctl: str = "systemctl", timeout: int = 120) -> None:
        self.systemctl = systemctl
        self.timeout = timeout

    def _run(self, action: str, service: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(  # nosec B603
                [self.systemctl, action, service],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise ServiceError(f"{self.systemctl} not found", service=service) from exc
        except subprocess.TimeoutExpired as exc:
            raise ServiceError(f"Timed out trying to {action} {service}", service=service) from exc

    def _call(self, action: str, service: str) -> None:
        result = self._run(action, service)
        if result.returncode != 0:
            raise ServiceError(
                f"Couldn't {action} {service}: {result.stderr.strip() or 'Unknown error'}",
                service=service,
            )
        logger.info("Service %s: %s", service, action)

    def start(self, service: str) -> None:
        self._call("start", service)

    def stop(self, service: str) -> None:
        self._call("stop", service)

    def restart(self, service: str) -> None:
        self._call("restart", service)

    def enable(self, service: str) -> None:
        self._call("enable", service)

    def is_enabled(self, service: str) -> bool:
        return self._run("is-enabled", service).returncode == 0


def register_core_restarts(events: EventManager, services: ServiceManager) -> None:
    """Register the listeners contributing the core service restarts."""

    for service, action, label, priority in CORE_SERVICES:

        def contribute(steps: list[Step], service: str = service, action: str = action, label: str = label) -> int:
            steps.append(Step(lambda: getattr(services, action)(service), label))
            return 0

        events.register_one(BEFORE_RESTART_SERVICES, contribute, priority)


async def restart_services(events: EventManager, progress: ProgressReporter | None = None) -> int:
    """
    Collect the restart steps contributed by listeners and run them.

    Returns:
        Number of services restarted.
    """
    steps: list[Step] = []
    code = await events.trigger(BEFORE_RESTART_SERVICES, steps)
    if code:
        raise ListenerError(BEFORE_RESTART_SERVICES, code)

    labelled = [Step(step.action, f"Restarting/Starting {step.label} service...") for step in steps]
    await run_steps(labelled, progress)

    code = await events.trigger(AFTER_RESTART_SERVICES)
    if code:
        raise ListenerError(AFTER_RESTART_SERVICES, code)
    return len(labelled)

"""
Stepper

Runs a sequence of labelled steps in declared order, reporting progress
before each one. The first failing step stops the sequence.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from hostpanel.exceptions import HostPanelError, StepError
from hostpanel.utils.logging import step_context
from hostpanel.utils.progress import ProgressReporter, log_progress

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """A callable and the human label shown while it runs."""

    action: Callable[[], Any]
    label: str


async def run_step(step: Step, index: int, total: int, progress: ProgressReporter | None = None) -> None:
    """
    Run one step.

    The action may be sync or async. It fails by returning a non-zero
    status or by raising.

    Raises:
        StepError: chained to the exception raised by the action, if any.
    """
    (progress or log_progress)(index, total, step.label)
    with step_context(step.label):
        try:
            outcome = step.action()
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except HostPanelError as exc:
            raise StepError(index, total, step.label, exc.message) from exc
        except Exception as exc:
            raise StepError(index, total, step.label, str(exc) or type(exc).__name__) from exc

    if outcome:
        raise StepError(index, total, step.label, f"returned status {outcome}")


async def run_steps(steps: Iterable[Step], progress: ProgressReporter | None = None) -> int:
    """Run `steps` in order. Returns the number of steps run."""
    steps = list(steps)
    total = len(steps)
    for index, step in enumerate(steps, start=1):
        await run_step(step, index, total, progress)
    return total

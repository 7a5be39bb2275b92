from __future__ import annotations

import inspect
import logging
from typing import Any, NamedTuple

from hostpanel.components.base import component_name

logger = logging.getLogger(__name__)


class DispatchResult(NamedTuple):
    outcome: Any
    supported: bool


def failure_reason(outcome: Any) -> str:
    """Describe a non-zero outcome. A string outcome is already a reason."""
    if isinstance(outcome, str):
        return outcome
    return f"returned status {outcome}"


def supports(component: Any, operation: str) -> bool:
    """Return True if the component implements `operation`."""
    return callable(getattr(component, operation, None))


async def invoke_if_supported(component: Any, operation: str, *args: Any) -> DispatchResult:
    """
    Call `component.<operation>(*args)` if the component implements it.

    A component without the operation yields ``DispatchResult(0, False)``;
    skipping an unsupported operation is not a failure. Otherwise the
    operation's outcome is returned as-is (None counts as 0), so a component
    may fail with either a status code or a message. Any exception it
    raises propagates to the caller.
    """
    if not supports(component, operation):
        logger.debug("%s does not implement %s", component_name(component), operation)
        return DispatchResult(0, False)

    outcome = getattr(component, operation)(*args)
    if inspect.isawaitable(outcome):
        outcome = await outcome
    return DispatchResult(outcome or 0, True)

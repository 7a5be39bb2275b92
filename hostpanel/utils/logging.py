"""
Structured Logging

Provides JSON-formatted logging for setup and reconciliation runs.
Every record carries the label of the step being executed, so a failed
run can be traced back to the exact step at which it stopped.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone

# Label of the step currently executing
current_step_var: ContextVar[str] = ContextVar("current_step", default="")


class StepContextFilter(logging.Filter):
    """Logging filter to add the current step label to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.step = current_step_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a format suitable for log aggregation systems
    like ELK Stack, Loki, or journald JSON ingestion.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "step": getattr(record, "step", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in ["component", "phase", "event", "table", "entity_id", "plugin"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


@contextmanager
def step_context(label: str):
    """Bind `label` as the current step for log records emitted inside the block."""
    token = current_step_var.set(label)
    try:
        yield
    finally:
        current_step_var.reset(token)


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(StepContextFilter())
    if log_format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

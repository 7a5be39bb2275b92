"""
Progress reporting

A progress reporter receives one (current index, total count, label)
triple per executed step or processed entity.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

logger = logging.getLogger(__name__)

ProgressReporter = Callable[[int, int, str], None]


def log_progress(index: int, total: int, label: str) -> None:
    """Default reporter: one INFO log record per step."""
    logger.info("[%d/%d] %s", index, total, label)


class ConsoleProgress:
    """Writes ``[index/total] label`` lines, for the command line entry points."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout
        self.events: list[tuple[int, int, str]] = []

    def __call__(self, index: int, total: int, label: str) -> None:
        self.events.append((index, total, label))
        width = len(str(total))
        self.stream.write(f"[{index:>{width}}/{total}] {label}\n")
        self.stream.flush()

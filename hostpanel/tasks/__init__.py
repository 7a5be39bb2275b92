"""
hostpanel reconciliation engine

    TaskProcessor        — converges pending entity rows
    ConvergenceHandlers  — per-table convergence handler registry
    TableStatusModel     — status state machine of one managed table
    MANAGED_TABLES       — managed tables in processing order
"""

from .handlers import ConvergenceHandlers, collect_handlers
from .processor import TaskProcessor, TaskSummary
from .status_model import ConvergenceAction, EntityStatus, TableStatusModel
from .tables import MANAGED_TABLES, get_table

__all__ = [
    "MANAGED_TABLES",
    "ConvergenceAction",
    "ConvergenceHandlers",
    "EntityStatus",
    "TableStatusModel",
    "TaskProcessor",
    "TaskSummary",
    "collect_handlers",
    "get_table",
]

"""
Task Processor

Scans the managed tables for rows with outstanding work and converges
each of them through its table's handler.

Row failures are isolated: a failing row is marked with the table's error
status and the error text, then processing moves on to the next row and
the next table. Only failures of the entity store itself abort the scan.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hostpanel.exceptions import DatabaseError
from hostpanel.tasks.handlers import ConvergenceHandlers
from hostpanel.tasks.status_model import SETUP_PRESERVED, ConvergenceAction, EntityStatus, TableStatusModel
from hostpanel.tasks.tables import MANAGED_TABLES
from hostpanel.utils.progress import ProgressReporter, log_progress

logger = logging.getLogger(__name__)


@dataclass
class TaskSummary:
    """Outcome of one process_pending() run. Failed rows count as processed."""

    processed: int = 0
    failed: int = 0

    @property
    def succeeded(self) -> int:
        return self.processed - self.failed


class TaskProcessor:
    """Converges pending entity rows, one row at a time."""

    def __init__(
        self,
        db: AsyncSession,
        handlers: ConvergenceHandlers,
        tables: Sequence[TableStatusModel] = MANAGED_TABLES,
        progress: ProgressReporter | None = None,
    ):
        self.db = db
        self.handlers = handlers
        self.tables = tuple(tables)
        self.progress = progress or log_progress

    # ============== Reconciliation ==============

    async def process_pending(self) -> TaskSummary:
        """
        Converge every pending row of every managed table.

        Tables are processed in declaration order and rows by ascending
        primary key.

        Raises:
            DatabaseError: the entity store cannot be read or written.
        """
        summary = TaskSummary()
        for table in self.tables:
            await self._process_table(table, summary)

        logger.info("DB tasks processed — %d rows, %d failed", summary.processed, summary.failed)
        return summary

    async def _process_table(self, table: TableStatusModel, summary: TaskSummary) -> None:
        entity_ids = await self._pending_ids(table)
        if not entity_ids:
            return

        handler = self.handlers.get(table.table)
        if handler is None:
            logger.warning(
                "No convergence handler for %s: %d pending rows left untouched",
                table.table,
                len(entity_ids),
                extra={"table": table.table},
            )
            return

        total = len(entity_ids)
        for index, entity_id in enumerate(entity_ids, start=1):
            row = await self._load(table, entity_id)
            # Another actor may have converged or removed the row since the scan
            if row is None or not table.is_pending(table.status_of(row)):
                logger.debug("Skipping %s %s: no longer pending", table.table, entity_id)
                continue

            status = table.status_of(row)
            action = table.action_for(status)
            self.progress(index, total, f"Processing {table.table} {entity_id} ({status})")
            summary.processed += 1

            try:
                outcome = handler(self.db, row, status)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as exc:
                summary.failed += 1
                await self._mark_failed(table, entity_id, exc)
                continue

            if not await self._mark_converged(table, row, entity_id, action):
                summary.failed += 1

    # ============== Row updates ==============

    async def _pending_ids(self, table: TableStatusModel) -> list[Any]:
        stmt = (
            select(table.primary_key)
            .where(table.status_column.in_(sorted(table.pending_statuses)), *table.filters())
            .order_by(table.primary_key)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot read pending rows of {table.table}: {exc}", operation="select") from exc
        return list(result.scalars().all())

    async def _load(self, table: TableStatusModel, entity_id: Any) -> Any | None:
        try:
            return await self.db.get(table.model, entity_id, populate_existing=True)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot read {table.table} {entity_id}: {exc}", operation="select") from exc

    async def _mark_converged(
        self, table: TableStatusModel, row: Any, entity_id: Any, action: ConvergenceAction
    ) -> bool:
        terminal = table.terminal_for(action)
        if terminal is not None:
            setattr(row, table.status_attr, terminal)
            setattr(row, table.message_attr, None)

        try:
            await self.db.commit()
        except IntegrityError as exc:
            # The handler left the row in a state the store rejects
            await self._mark_failed(table, entity_id, exc)
            return False
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Cannot update {table.table} {entity_id}: {exc}", operation="commit") from exc

        logger.debug(
            "%s %s converged (%s)",
            table.table,
            entity_id,
            terminal or "removed",
            extra={"table": table.table, "entity_id": entity_id},
        )
        return True

    async def _mark_failed(self, table: TableStatusModel, entity_id: Any, exc: Exception) -> None:
        message = str(exc) or type(exc).__name__
        logger.error(
            "%s %s could not be converged: %s",
            table.table,
            entity_id,
            message,
            extra={"table": table.table, "entity_id": entity_id},
        )
        try:
            await self.db.rollback()
            row = await self.db.get(table.model, entity_id, populate_existing=True)
            if row is None:
                return
            setattr(row, table.status_attr, table.error_status)
            setattr(row, table.message_attr, message)
            await self.db.commit()
        except SQLAlchemyError as db_exc:
            raise DatabaseError(
                f"Cannot record failure of {table.table} {entity_id}: {db_exc}", operation="commit"
            ) from db_exc

    # ============== Setup requeue ==============

    async def requeue_for_setup(self) -> None:
        """
        Schedule every entity for reconfiguration.

        Used by setup runs so that configuration changes reach all existing
        entities: settled rows (including rows in error) become 'tochange'
        and disabled rows become 'todisable'. Tables declaring
        requeue_statuses only requeue those statuses and clear their error.
        """
        tochange = EntityStatus.TOCHANGE.value
        try:
            for table in self.tables:
                column = table.status_column
                if table.requeue_statuses is None:
                    statements = [
                        update(table.model)
                        .where(column.not_in(sorted(SETUP_PRESERVED)), *table.filters())
                        .values({column: tochange}),
                        update(table.model)
                        .where(column == EntityStatus.DISABLED.value, *table.filters())
                        .values({column: EntityStatus.TODISABLE.value}),
                    ]
                else:
                    statements = [
                        update(table.model)
                        .where(column.in_(sorted(table.requeue_statuses)), *table.filters())
                        .values({column: tochange, getattr(table.model, table.message_attr): None})
                    ]
                for statement in statements:
                    await self.db.execute(statement.execution_options(synchronize_session=False))
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise DatabaseError(f"Cannot requeue entities: {exc}", operation="update") from exc
        logger.info("Entities requeued for setup")

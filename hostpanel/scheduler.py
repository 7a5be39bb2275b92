from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from hostpanel.database import AsyncSessionLocal
from hostpanel.tasks.handlers import ConvergenceHandlers
from hostpanel.tasks.processor import TaskProcessor
import logging

scheduler = AsyncIOScheduler()

logger = logging.getLogger(__name__)

RECONCILE_JOB_ID = "reconcile_pending"


async def reconcile_pending(handlers: ConvergenceHandlers, session_factory=AsyncSessionLocal):
    async with session_factory() as db:
        summary = await TaskProcessor(db, handlers).process_pending()
        if summary.processed:
            logger.info(f"[Scheduler] Reconciled {summary.processed} rows ({summary.failed} failed)")
        return summary


def schedule_reconciliation(handlers: ConvergenceHandlers, interval_seconds: int, session_factory=AsyncSessionLocal):
    if interval_seconds <= 0:
        raise ValueError("Reconciliation interval must be positive")
    scheduler.add_job(
        reconcile_pending,
        trigger=IntervalTrigger(seconds=interval_seconds),
        args=[handlers, session_factory],
        id=RECONCILE_JOB_ID,
        replace_existing=True,
        # A slow run must not overlap with the next one
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"[Scheduler] Reconciliation scheduled every {interval_seconds}s")

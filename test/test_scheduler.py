"""
Reconciliation Scheduler Tests
"""

from __future__ import annotations

import pytest
from sqlalchemy import select


@pytest.fixture(autouse=True)
def clean_scheduler():
    from hostpanel.scheduler import scheduler

    yield
    scheduler.remove_all_jobs()


class TestScheduleReconciliation:
    def test_job_is_registered(self):
        from apscheduler.triggers.interval import IntervalTrigger

        from hostpanel.scheduler import RECONCILE_JOB_ID, schedule_reconciliation, scheduler
        from hostpanel.tasks.handlers import ConvergenceHandlers

        schedule_reconciliation(ConvergenceHandlers(), 300)

        job = scheduler.get_job(RECONCILE_JOB_ID)
        assert job is not None
        assert isinstance(job.trigger, IntervalTrigger)
        assert job.max_instances == 1

    def test_interval_must_be_positive(self):
        from hostpanel.scheduler import schedule_reconciliation
        from hostpanel.tasks.handlers import ConvergenceHandlers

        with pytest.raises(ValueError):
            schedule_reconciliation(ConvergenceHandlers(), 0)


class TestReconcilePending:
    async def test_reconcile_uses_its_own_session(self, session_factory):
        from hostpanel.models import Domain
        from hostpanel.scheduler import reconcile_pending
        from hostpanel.tasks.handlers import ConvergenceHandlers

        async with session_factory() as db:
            db.add(Domain(domain_name="a.test", domain_admin_id=1, domain_status="toadd"))
            await db.commit()

        handlers = ConvergenceHandlers({"domain": lambda db, row, status: None})
        summary = await reconcile_pending(handlers, session_factory)

        assert summary.processed == 1
        async with session_factory() as db:
            result = await db.execute(select(Domain.domain_status))
            assert result.scalar_one() == "enabled"

"""
Admin Command Routes

POST /api/v1/admin/setup  → run the full setup sequence
POST /api/v1/admin/tasks  → process pending DB tasks

When settings.admin_token is set, requests must carry it in the
X-Admin-Token header.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hostpanel.config import Settings, settings
from hostpanel.database import get_db
from hostpanel.exceptions import AdminAuthenticationError
from hostpanel.services.admin_service import AdminService

router = APIRouter(tags=["Admin"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class SetupResponse(BaseModel):
    status: str
    steps: list[str]
    processed: int = 0
    failed: int = 0


class TasksResponse(BaseModel):
    processed: int
    failed: int


# ── Dependencies ───────────────────────────────────────────────────────────────


def get_settings() -> Settings:
    return settings


def require_admin_token(
    x_admin_token: str | None = Header(default=None),
    current_settings: Settings = Depends(get_settings),
) -> None:
    expected = current_settings.admin_token
    if expected and not (x_admin_token and secrets.compare_digest(x_admin_token, expected)):
        raise AdminAuthenticationError()


# ── Routes ─────────────────────────────────────────────────────────────────────


@router.post("/setup", response_model=SetupResponse, status_code=status.HTTP_200_OK)
async def run_setup(
    db: AsyncSession = Depends(get_db),
    current_settings: Settings = Depends(get_settings),
    _auth: None = Depends(require_admin_token),
) -> SetupResponse:
    """Run setup; a failing step surfaces through the HostPanelError handler."""
    steps: list[str] = []
    runner = await AdminService(db, current_settings).run_setup(lambda index, total, label: steps.append(label))
    summary = runner.db_tasks
    return SetupResponse(
        status="completed",
        steps=steps,
        processed=summary.processed if summary else 0,
        failed=summary.failed if summary else 0,
    )


@router.post("/tasks", response_model=TasksResponse)
async def process_tasks(
    db: AsyncSession = Depends(get_db),
    current_settings: Settings = Depends(get_settings),
    _auth: None = Depends(require_admin_token),
) -> TasksResponse:
    """Converge every pending entity and report the counts."""
    summary = await AdminService(db, current_settings).process_tasks()
    return TasksResponse(processed=summary.processed, failed=summary.failed)

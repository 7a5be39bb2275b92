import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from hostpanel.components.registry import ComponentRegistry
from hostpanel.config import settings
from hostpanel.exception_handlers import register_exception_handlers
from hostpanel.routes import admin
from hostpanel.scheduler import scheduler, schedule_reconciliation
from hostpanel.tasks.handlers import collect_handlers
from hostpanel.utils.logging import configure_logging

configure_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the reconciliation scheduler when an interval is configured."""
    logger.info("Starting up the application...")
    if settings.reconcile_interval_seconds > 0:
        registry = ComponentRegistry.from_settings(settings)
        handlers = await collect_handlers(registry.all_components())
        schedule_reconciliation(handlers, settings.reconcile_interval_seconds)
        scheduler.start()
    yield
    if scheduler.running:
        scheduler.shutdown(wait=False)
    logger.info("Shutting down the application...")


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Hosting panel setup and reconciliation API",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    app.include_router(admin.router, prefix="/api/v1/admin")

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": f"{settings.app_name} admin API", "version": settings.app_version}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000)

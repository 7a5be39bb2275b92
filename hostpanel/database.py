from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from hostpanel.config import settings
import logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def _engine_options(url: str, environment: str) -> dict:
    # SQLite engines manage their own pools
    if url.startswith("sqlite"):
        return {"echo": environment != "production" and settings.debug}
    if environment == "production":
        return {"pool_size": 20, "max_overflow": 50, "pool_timeout": 60, "pool_recycle": 1800}
    return {"echo": settings.debug, "pool_size": 10, "max_overflow": 20, "pool_timeout": 30}


engine = create_async_engine(DATABASE_URL, **_engine_options(DATABASE_URL, settings.environment))

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def create_schema(db: AsyncSession) -> None:
    """Create every managed table that does not exist yet."""
    # Models register themselves on Base.metadata when imported
    import hostpanel.models  # noqa: F401

    await db.run_sync(lambda session: Base.metadata.create_all(session.connection()))
    await db.commit()


async def get_db():
    logger.debug("Opening database session...")
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error(f"Database session error: {e}")
            raise
        finally:
            await db.close()
            logger.debug("Database session closed.")

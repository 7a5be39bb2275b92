"""
Pytest configuration and fixtures for hostpanel tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Keep the application engine off the filesystem; must be set before hostpanel.config is imported
os.environ.setdefault("HOSTPANEL_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import hostpanel.models  # noqa: E402, F401
from hostpanel.database import Base  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_test_engine():
    # One shared connection, otherwise every checkout sees a new empty database
    return create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory database with every managed table created."""
    engine = make_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def empty_engine():
    """In-memory database without any table, as on a fresh install."""
    engine = make_test_engine()
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session bound to the in-memory test database."""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def empty_db(empty_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(empty_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session


@pytest.fixture
def progress_events():
    """A progress reporter recording (index, total, label) triples."""
    events: list[tuple[int, int, str]] = []

    def report(index: int, total: int, label: str) -> None:
        events.append((index, total, label))

    report.events = events
    return report

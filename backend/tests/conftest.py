"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.infrastructure.local.category_repository import SqliteCategoryRepository
from app.infrastructure.local.database import Base
from app.infrastructure.local.phase_repository import SqlitePhaseRepository
from app.infrastructure.local.routine_block_repository import SqliteRoutineBlockRepository
from app.infrastructure.local.routine_execution_repository import (
    SqliteRoutineExecutionRepository,
)
from app.infrastructure.local.timesheet_repository import SqliteTimesheetRepository


@pytest.fixture
async def session_factory():
    """Create in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def test_user_id():
    return "test_user_123"


@pytest.fixture
def phase_repo(session_factory):
    return SqlitePhaseRepository(session_factory=session_factory)


@pytest.fixture
def category_repo(session_factory):
    return SqliteCategoryRepository(session_factory=session_factory)


@pytest.fixture
def block_repo(session_factory):
    return SqliteRoutineBlockRepository(session_factory=session_factory)


@pytest.fixture
def execution_repo(session_factory):
    return SqliteRoutineExecutionRepository(session_factory=session_factory)


@pytest.fixture
def timesheet_repo(session_factory):
    return SqliteTimesheetRepository(session_factory=session_factory)

"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from functools import lru_cache
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import get_settings
from app.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class PhaseORM(Base):
    """Phase ORM model."""

    __tablename__ = "phases"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    duration_days = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    why = Column(Text, nullable=False)
    outcome = Column(Text, nullable=False)
    is_active = Column(Boolean, default=False, index=True)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=now_utc)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc)


class CategoryORM(Base):
    """Category ORM model."""

    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_categories_user_name"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=now_utc)


class RoutineBlockORM(Base):
    """Routine block ORM model (template when date is NULL)."""

    __tablename__ = "routine_blocks"
    __table_args__ = (Index("ix_routine_blocks_phase_date", "phase_id", "date"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    phase_id = Column(String(36), ForeignKey("phases.id"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    title = Column(String(200), nullable=False)
    note = Column(Text, nullable=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    color = Column(String(50), default="primary")
    is_template = Column(Boolean, default=False, index=True)
    date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=now_utc)


class RoutineExecutionORM(Base):
    """Routine execution ORM model."""

    __tablename__ = "routine_executions"
    __table_args__ = (
        UniqueConstraint("routine_block_id", "date", name="uq_routine_executions_block_date"),
        Index("ix_routine_executions_phase_date", "phase_id", "date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    routine_block_id = Column(String(36), ForeignKey("routine_blocks.id"), nullable=False)
    phase_id = Column(String(36), ForeignKey("phases.id"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False)  # DONE / SKIPPED
    created_at = Column(DateTime, default=now_utc)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc)


class TimesheetEntryORM(Base):
    """Timesheet entry ORM model."""

    __tablename__ = "timesheet_entries"
    __table_args__ = (Index("ix_timesheet_entries_phase_date", "phase_id", "date"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    phase_id = Column(String(36), ForeignKey("phases.id"), nullable=False)
    title = Column(String(200), nullable=False)
    note = Column(Text, nullable=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    priority = Column(String(10), default="MEDIUM")
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=now_utc)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

"""
SQLite implementation of timesheet repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from app.core.exceptions import NotFoundError
from app.infrastructure.local.database import TimesheetEntryORM, get_session_factory
from app.interfaces.timesheet_repository import ITimesheetRepository
from app.models.timesheet import TimesheetEntry, TimesheetEntryCreate, TimesheetEntryUpdate
from app.utils.datetime_utils import now_utc


class SqliteTimesheetRepository(ITimesheetRepository):
    """SQLite implementation of timesheet repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TimesheetEntryORM) -> TimesheetEntry:
        """Convert ORM object to Pydantic model."""
        return TimesheetEntry.model_validate(orm, from_attributes=True)

    async def _find(self, session, phase_id: UUID, entry_id: UUID) -> TimesheetEntryORM | None:
        result = await session.execute(
            select(TimesheetEntryORM).where(
                and_(
                    TimesheetEntryORM.id == str(entry_id),
                    TimesheetEntryORM.phase_id == str(phase_id),
                )
            )
        )
        return result.scalar_one_or_none()

    async def create(self, phase_id: UUID, data: TimesheetEntryCreate) -> TimesheetEntry:
        """Create an entry in a phase."""
        async with self._session_factory() as session:
            orm = TimesheetEntryORM(
                id=str(uuid4()),
                phase_id=str(phase_id),
                title=data.title,
                note=data.note,
                start_time=data.start_time,
                end_time=data.end_time,
                priority=data.priority.value,
                date=data.date,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, phase_id: UUID, entry_id: UUID) -> Optional[TimesheetEntry]:
        """Get an entry of a phase."""
        async with self._session_factory() as session:
            orm = await self._find(session, phase_id, entry_id)
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        phase_id: UUID,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[TimesheetEntry]:
        """List entries, newest day first, optionally within [start, end]."""
        async with self._session_factory() as session:
            conditions = [TimesheetEntryORM.phase_id == str(phase_id)]
            if start is not None:
                conditions.append(TimesheetEntryORM.date >= start)
            if end is not None:
                conditions.append(TimesheetEntryORM.date <= end)

            result = await session.execute(
                select(TimesheetEntryORM)
                .where(and_(*conditions))
                .order_by(TimesheetEntryORM.date.desc(), TimesheetEntryORM.start_time)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(
        self, phase_id: UUID, entry_id: UUID, data: TimesheetEntryUpdate
    ) -> TimesheetEntry:
        """Replace an entry's fields."""
        async with self._session_factory() as session:
            orm = await self._find(session, phase_id, entry_id)
            if not orm:
                raise NotFoundError(f"Timesheet entry {entry_id} not found")

            for field, value in data.model_dump().items():
                if field == "priority":
                    value = value.value if hasattr(value, "value") else value
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, phase_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry."""
        async with self._session_factory() as session:
            orm = await self._find(session, phase_id, entry_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True

"""
SQLite implementation of Phase repository.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.interfaces.phase_repository import IPhaseRepository
from app.models.phase import Phase, PhaseCreate, PhaseUpdate
from app.infrastructure.local.database import (
    PhaseORM,
    RoutineBlockORM,
    RoutineExecutionORM,
    TimesheetEntryORM,
    get_session_factory,
)
from app.utils.datetime_utils import now_utc


class SqlitePhaseRepository(IPhaseRepository):
    """SQLite implementation of phase repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: PhaseORM) -> Phase:
        """Convert ORM object to Pydantic model."""
        return Phase.model_validate(orm, from_attributes=True)

    async def _get_orm(self, session: AsyncSession, user_id: str, phase_id: UUID) -> PhaseORM:
        result = await session.execute(
            select(PhaseORM).where(
                and_(PhaseORM.id == str(phase_id), PhaseORM.user_id == user_id)
            )
        )
        orm = result.scalar_one_or_none()
        if not orm:
            raise NotFoundError(f"Phase {phase_id} not found")
        return orm

    async def _deactivate_all(self, session: AsyncSession, user_id: str) -> None:
        await session.execute(
            update(PhaseORM)
            .where(and_(PhaseORM.user_id == user_id, PhaseORM.is_active.is_(True)))
            .values(is_active=False, updated_at=now_utc())
        )

    async def create(self, user_id: str, phase: PhaseCreate) -> Phase:
        """Create a new phase. It becomes the user's only active phase."""
        async with self._session_factory() as session:
            await self._deactivate_all(session, user_id)
            orm = PhaseORM(
                id=str(uuid4()),
                user_id=user_id,
                name=phase.name.strip(),
                duration_days=phase.duration_days,
                start_date=phase.start_date,
                end_date=phase.end_date,
                why=phase.why.strip(),
                outcome=phase.outcome.strip(),
                is_active=True,
                current_streak=0,
                longest_streak=0,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get_by_id(self, user_id: str, phase_id: UUID) -> Phase | None:
        """Get a phase by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(PhaseORM).where(
                    and_(PhaseORM.id == str(phase_id), PhaseORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_active(self, user_id: str) -> Phase | None:
        """Get the user's active phase, if any."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(PhaseORM)
                .where(and_(PhaseORM.user_id == user_id, PhaseORM.is_active.is_(True)))
                .order_by(PhaseORM.created_at.desc())
                .limit(1)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(self, user_id: str) -> list[Phase]:
        """List all phases of a user, newest first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(PhaseORM)
                .where(PhaseORM.user_id == user_id)
                .order_by(PhaseORM.created_at.desc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, user_id: str, phase_id: UUID, update: PhaseUpdate) -> Phase:
        """Update the descriptive fields of a phase."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, phase_id)

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    setattr(orm, field, value.strip())

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def activate(self, user_id: str, phase_id: UUID) -> Phase:
        """Make a phase the active one, deactivating any other."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, phase_id)
            await self._deactivate_all(session, user_id)
            orm.is_active = True
            orm.completed_at = None
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def archive(self, user_id: str, phase_id: UUID) -> Phase:
        """Deactivate a phase and stamp completed_at."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, phase_id)
            orm.is_active = False
            orm.completed_at = now_utc()
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update_streaks(
        self, user_id: str, phase_id: UUID, current_streak: int, longest_streak: int
    ) -> Phase:
        """Persist recalculated streak values as given."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, phase_id)
            orm.current_streak = current_streak
            orm.longest_streak = longest_streak
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, phase_id: UUID) -> bool:
        """Delete a phase and everything it owns. Returns False if not found."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(PhaseORM).where(
                    and_(PhaseORM.id == str(phase_id), PhaseORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return False

            # Children first: executions -> blocks -> timesheet entries
            await session.execute(
                delete(RoutineExecutionORM).where(RoutineExecutionORM.phase_id == orm.id)
            )
            await session.execute(
                delete(RoutineBlockORM).where(RoutineBlockORM.phase_id == orm.id)
            )
            await session.execute(
                delete(TimesheetEntryORM).where(TimesheetEntryORM.phase_id == orm.id)
            )
            await session.delete(orm)
            await session.commit()
            return True

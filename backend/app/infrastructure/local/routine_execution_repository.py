"""
SQLite implementation of routine execution repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from app.infrastructure.local.database import RoutineExecutionORM, get_session_factory
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.models.enums import ExecutionStatus
from app.models.execution import RoutineExecution
from app.utils.datetime_utils import now_utc


class SqliteRoutineExecutionRepository(IRoutineExecutionRepository):
    """SQLite implementation of routine execution repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: RoutineExecutionORM) -> RoutineExecution:
        """Convert ORM object to Pydantic model."""
        return RoutineExecution.model_validate(orm, from_attributes=True)

    async def upsert(
        self,
        phase_id: UUID,
        routine_block_id: UUID,
        day: date,
        status: ExecutionStatus,
    ) -> RoutineExecution:
        """Create or update the execution of a block on a day."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoutineExecutionORM).where(
                    and_(
                        RoutineExecutionORM.routine_block_id == str(routine_block_id),
                        RoutineExecutionORM.date == day,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if orm:
                orm.status = status.value
                orm.updated_at = now_utc()
            else:
                orm = RoutineExecutionORM(
                    id=str(uuid4()),
                    routine_block_id=str(routine_block_id),
                    phase_id=str(phase_id),
                    date=day,
                    status=status.value,
                )
                session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_in_range(
        self,
        phase_id: UUID,
        start: date,
        end: date,
        status: Optional[ExecutionStatus] = None,
    ) -> list[RoutineExecution]:
        """List executions of a phase with start <= date <= end."""
        async with self._session_factory() as session:
            conditions = [
                RoutineExecutionORM.phase_id == str(phase_id),
                RoutineExecutionORM.date >= start,
                RoutineExecutionORM.date <= end,
            ]
            if status is not None:
                conditions.append(RoutineExecutionORM.status == status.value)

            result = await session.execute(
                select(RoutineExecutionORM)
                .where(and_(*conditions))
                .order_by(RoutineExecutionORM.date)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

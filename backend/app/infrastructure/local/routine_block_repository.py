"""
SQLite implementation of routine block repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.local.database import (
    CategoryORM,
    RoutineBlockORM,
    RoutineExecutionORM,
    get_session_factory,
)
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.models.routine_block import RoutineBlock, RoutineBlockDraft
from app.utils.datetime_utils import now_utc


class SqliteRoutineBlockRepository(IRoutineBlockRepository):
    """SQLite implementation of routine block repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _select_blocks(self):
        return select(RoutineBlockORM, CategoryORM.name).outerjoin(
            CategoryORM, CategoryORM.id == RoutineBlockORM.category_id
        )

    def _orm_to_model(self, orm: RoutineBlockORM, category_name: str | None) -> RoutineBlock:
        """Convert ORM object to Pydantic model."""
        return RoutineBlock(
            id=orm.id,
            phase_id=orm.phase_id,
            category_id=orm.category_id,
            category=category_name,
            title=orm.title,
            note=orm.note,
            start_time=orm.start_time,
            end_time=orm.end_time,
            color=orm.color or "primary",
            is_template=bool(orm.is_template),
            date=orm.date,
            created_at=orm.created_at,
        )

    async def get(self, block_id: UUID) -> Optional[RoutineBlock]:
        """Get a block by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                self._select_blocks().where(RoutineBlockORM.id == str(block_id))
            )
            row = result.one_or_none()
            return self._orm_to_model(row[0], row[1]) if row else None

    async def list_templates(self, phase_id: UUID) -> list[RoutineBlock]:
        """List template blocks of a phase ordered by start time."""
        async with self._session_factory() as session:
            result = await session.execute(
                self._select_blocks()
                .where(
                    and_(
                        RoutineBlockORM.phase_id == str(phase_id),
                        RoutineBlockORM.is_template.is_(True),
                        RoutineBlockORM.date.is_(None),
                    )
                )
                .order_by(RoutineBlockORM.start_time)
            )
            return [self._orm_to_model(orm, name) for orm, name in result.all()]

    async def replace_templates(
        self, phase_id: UUID, drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """Replace every template block of a phase."""
        async with self._session_factory() as session:
            await session.execute(
                delete(RoutineBlockORM)
                .where(
                    and_(
                        RoutineBlockORM.phase_id == str(phase_id),
                        RoutineBlockORM.is_template.is_(True),
                    )
                )
                .execution_options(synchronize_session=False)
            )
            created = await self._insert(session, phase_id, drafts)
            await session.commit()
            return created

    async def list_dated(
        self, phase_id: UUID, start: date, end: date
    ) -> list[RoutineBlock]:
        """List dated blocks with start <= date <= end, by date then start time."""
        async with self._session_factory() as session:
            result = await session.execute(
                self._select_blocks()
                .where(
                    and_(
                        RoutineBlockORM.phase_id == str(phase_id),
                        RoutineBlockORM.is_template.is_(False),
                        RoutineBlockORM.date >= start,
                        RoutineBlockORM.date <= end,
                    )
                )
                .order_by(RoutineBlockORM.date, RoutineBlockORM.start_time)
            )
            return [self._orm_to_model(orm, name) for orm, name in result.all()]

    async def replace_all_dated(
        self, phase_id: UUID, drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """Discard every dated block of a phase and write the drafts instead."""
        async with self._session_factory() as session:
            await self._delete_dated(session, phase_id)
            created = await self._insert(session, phase_id, drafts)
            await session.commit()
            return created

    async def replace_dated_for_dates(
        self, phase_id: UUID, dates: list[date], drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """Discard the dated blocks of the given days and write the drafts instead."""
        async with self._session_factory() as session:
            await self._delete_dated(session, phase_id, dates)
            created = await self._insert(session, phase_id, drafts)
            await session.commit()
            return created

    async def _delete_dated(
        self, session: AsyncSession, phase_id: UUID, dates: list[date] | None = None
    ) -> None:
        """Delete dated blocks, their executions first."""
        conditions = [
            RoutineBlockORM.phase_id == str(phase_id),
            RoutineBlockORM.is_template.is_(False),
        ]
        if dates is not None:
            conditions.append(RoutineBlockORM.date.in_(dates))

        block_ids = select(RoutineBlockORM.id).where(and_(*conditions))
        await session.execute(
            delete(RoutineExecutionORM)
            .where(RoutineExecutionORM.routine_block_id.in_(block_ids))
            .execution_options(synchronize_session=False)
        )
        await session.execute(
            delete(RoutineBlockORM)
            .where(and_(*conditions))
            .execution_options(synchronize_session=False)
        )

    async def _insert(
        self, session: AsyncSession, phase_id: UUID, drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        orms = [
            RoutineBlockORM(
                id=str(uuid4()),
                phase_id=str(phase_id),
                category_id=str(draft.category_id),
                title=draft.title,
                note=draft.note,
                start_time=draft.start_time,
                end_time=draft.end_time,
                color=draft.color,
                is_template=draft.is_template,
                date=None if draft.is_template else draft.date,
                created_at=now_utc(),
            )
            for draft in drafts
        ]
        session.add_all(orms)
        await session.flush()

        category_ids = {orm.category_id for orm in orms}
        names: dict[str, str] = {}
        if category_ids:
            result = await session.execute(
                select(CategoryORM.id, CategoryORM.name).where(CategoryORM.id.in_(category_ids))
            )
            names = {row[0]: row[1] for row in result.all()}
        return [self._orm_to_model(orm, names.get(orm.category_id)) for orm in orms]

"""
SQLite implementation of Category repository.
"""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError

from app.infrastructure.local.database import CategoryORM, get_session_factory
from app.interfaces.category_repository import ICategoryRepository
from app.models.category import Category


class SqliteCategoryRepository(ICategoryRepository):
    """SQLite implementation of category repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: CategoryORM) -> Category:
        return Category.model_validate(orm, from_attributes=True)

    async def _find(self, session, user_id: str, name: str) -> CategoryORM | None:
        result = await session.execute(
            select(CategoryORM).where(
                and_(CategoryORM.user_id == user_id, CategoryORM.name == name)
            )
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, user_id: str, name: str) -> Category:
        """Find the user's category by name, creating it when missing."""
        name = name.strip()
        async with self._session_factory() as session:
            orm = await self._find(session, user_id, name)
            if orm:
                return self._orm_to_model(orm)

            orm = CategoryORM(id=str(uuid4()), user_id=user_id, name=name)
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError:
                # Created concurrently; the unique (user_id, name) row now exists
                await session.rollback()
                orm = await self._find(session, user_id, name)
                return self._orm_to_model(orm)
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list(self, user_id: str) -> list[Category]:
        """List the user's categories."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(CategoryORM)
                .where(CategoryORM.user_id == user_id)
                .order_by(CategoryORM.name)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

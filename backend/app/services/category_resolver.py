"""
Category resolution for routine blocks.

Blocks reference categories by name on input; writes need a category id.
Resolved ids are cached for the lifetime of one resolver (one operation).
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from app.core.logger import setup_logger
from app.interfaces.category_repository import ICategoryRepository

logger = setup_logger(__name__)

DEFAULT_CATEGORY_NAME = "Uncategorized"


class CategoryResolver:
    """Find-or-create categories scoped to one user."""

    def __init__(
        self,
        category_repo: ICategoryRepository,
        user_id: str,
        default_name: str = DEFAULT_CATEGORY_NAME,
    ):
        self.category_repo = category_repo
        self.user_id = user_id
        self.default_name = default_name
        self._cache: dict[str, UUID] = {}

    async def resolve(self, name: Optional[str]) -> UUID:
        """Category id for a name; blank names map to the default category."""
        name = (name or "").strip() or self.default_name
        if name not in self._cache:
            category = await self.category_repo.get_or_create(self.user_id, name)
            self._cache[name] = category.id
        return self._cache[name]

    async def default_id(self) -> UUID:
        return await self.resolve(None)

    async def ensure(self, category_id: Optional[UUID], block_title: str) -> UUID:
        """Keep an existing reference, or fall back to the default category."""
        if category_id is not None:
            return category_id
        logger.warning(
            "Block '%s' has no category; using '%s' for user %s",
            block_title,
            self.default_name,
            self.user_id,
        )
        return await self.default_id()

"""
Category repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.category import Category


class ICategoryRepository(ABC):
    """Interface for category persistence."""

    @abstractmethod
    async def get_or_create(self, user_id: str, name: str) -> Category:
        """Find the user's category by name, creating it when missing."""
        pass

    @abstractmethod
    async def list(self, user_id: str) -> list[Category]:
        """List the user's categories."""
        pass

"""
Phase repository interface.

Defines the contract for phase data operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from app.models.phase import Phase, PhaseCreate, PhaseUpdate


class IPhaseRepository(ABC):
    """Interface for phase repository operations."""

    @abstractmethod
    async def create(self, user_id: str, phase: PhaseCreate) -> Phase:
        """Create a new phase. It becomes the user's only active phase."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str, phase_id: UUID) -> Phase | None:
        """Get a phase by ID."""
        pass

    @abstractmethod
    async def get_active(self, user_id: str) -> Phase | None:
        """Get the user's active phase, if any."""
        pass

    @abstractmethod
    async def list(self, user_id: str) -> list[Phase]:
        """List all phases of a user, newest first."""
        pass

    @abstractmethod
    async def update(self, user_id: str, phase_id: UUID, update: PhaseUpdate) -> Phase:
        """Update the descriptive fields of a phase."""
        pass

    @abstractmethod
    async def activate(self, user_id: str, phase_id: UUID) -> Phase:
        """Make a phase the active one, deactivating any other."""
        pass

    @abstractmethod
    async def archive(self, user_id: str, phase_id: UUID) -> Phase:
        """Deactivate a phase and stamp completed_at."""
        pass

    @abstractmethod
    async def update_streaks(
        self, user_id: str, phase_id: UUID, current_streak: int, longest_streak: int
    ) -> Phase:
        """Persist recalculated streak values as given."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, phase_id: UUID) -> bool:
        """Delete a phase and everything it owns. Returns False if not found."""
        pass

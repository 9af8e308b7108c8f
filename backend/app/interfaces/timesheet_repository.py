"""
Timesheet repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from app.models.timesheet import TimesheetEntry, TimesheetEntryCreate, TimesheetEntryUpdate


class ITimesheetRepository(ABC):
    """Abstract interface for timesheet persistence."""

    @abstractmethod
    async def create(self, phase_id: UUID, data: TimesheetEntryCreate) -> TimesheetEntry:
        """Create an entry in a phase."""
        pass

    @abstractmethod
    async def get(self, phase_id: UUID, entry_id: UUID) -> Optional[TimesheetEntry]:
        """Get an entry of a phase."""
        pass

    @abstractmethod
    async def list(
        self,
        phase_id: UUID,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[TimesheetEntry]:
        """List entries, newest day first, optionally within [start, end]."""
        pass

    @abstractmethod
    async def update(
        self, phase_id: UUID, entry_id: UUID, data: TimesheetEntryUpdate
    ) -> TimesheetEntry:
        """Replace an entry's fields."""
        pass

    @abstractmethod
    async def delete(self, phase_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry."""
        pass

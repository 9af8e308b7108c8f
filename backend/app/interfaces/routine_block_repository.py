"""
Routine block repository interface.

Defines contract for template and dated block persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from app.models.routine_block import RoutineBlock, RoutineBlockDraft


class IRoutineBlockRepository(ABC):
    """Abstract interface for routine block persistence."""

    @abstractmethod
    async def get(self, block_id: UUID) -> Optional[RoutineBlock]:
        """Get a block by ID."""
        pass

    @abstractmethod
    async def list_templates(self, phase_id: UUID) -> list[RoutineBlock]:
        """List template blocks of a phase ordered by start time."""
        pass

    @abstractmethod
    async def replace_templates(
        self, phase_id: UUID, drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """Replace every template block of a phase."""
        pass

    @abstractmethod
    async def list_dated(
        self, phase_id: UUID, start: date, end: date
    ) -> list[RoutineBlock]:
        """List dated blocks with start <= date <= end, by date then start time."""
        pass

    @abstractmethod
    async def replace_all_dated(
        self, phase_id: UUID, drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """
        Discard every dated block of a phase and write the drafts instead.

        Executions of the discarded blocks are deleted before the blocks,
        and the whole replacement commits as one transaction.
        """
        pass

    @abstractmethod
    async def replace_dated_for_dates(
        self, phase_id: UUID, dates: list[date], drafts: list[RoutineBlockDraft]
    ) -> list[RoutineBlock]:
        """
        Discard the dated blocks of the given days and write the drafts instead.

        Same ordering and transaction guarantees as replace_all_dated.
        """
        pass

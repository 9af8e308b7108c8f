"""
Routine execution repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from app.models.enums import ExecutionStatus
from app.models.execution import RoutineExecution


class IRoutineExecutionRepository(ABC):
    """Abstract interface for execution persistence."""

    @abstractmethod
    async def upsert(
        self,
        phase_id: UUID,
        routine_block_id: UUID,
        day: date,
        status: ExecutionStatus,
    ) -> RoutineExecution:
        """Create or update the execution of a block on a day."""
        pass

    @abstractmethod
    async def list_in_range(
        self,
        phase_id: UUID,
        start: date,
        end: date,
        status: Optional[ExecutionStatus] = None,
    ) -> list[RoutineExecution]:
        """List executions of a phase with start <= date <= end."""
        pass

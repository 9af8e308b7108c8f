"""
Execution service.

Records DONE/SKIPPED outcomes for dated blocks of the active phase and
refreshes the phase streak before the write is acknowledged.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.models.enums import ExecutionState
from app.models.execution import ExecutionLog, ExecutionLogResult
from app.models.phase import Phase
from app.models.routine_block import RoutineBlockWithStatus
from app.services.streak_service import StreakService
from app.utils.calendar_utils import date_key

logger = setup_logger(__name__)


class ExecutionService:
    """Service for the day-by-day execution of the active phase."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        execution_repo: IRoutineExecutionRepository,
        streak_service: StreakService,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.execution_repo = execution_repo
        self.streak_service = streak_service

    async def log(self, user_id: str, payload: ExecutionLog) -> ExecutionLogResult:
        """
        Upsert an execution and recalculate the streak.

        Raises:
            NotFoundError: Block missing or not a dated block of the active phase
            ValidationError: Date does not match the block's day
        """
        phase = await self.phase_repo.get_active(user_id)
        block = await self.block_repo.get(payload.routine_block_id)
        if (
            not phase
            or not block
            or block.phase_id != phase.id
            or block.is_template
            or block.date is None
        ):
            raise NotFoundError(
                f"Routine block {payload.routine_block_id} not found or does not belong to active phase"
            )

        day = payload.date or block.date
        if day != block.date:
            raise ValidationError(
                f"Block {block.id} is scheduled on {date_key(block.date)}, not {date_key(day)}"
            )

        execution = await self.execution_repo.upsert(phase.id, block.id, day, payload.status)
        streak = await self.streak_service.recalculate(user_id, phase.id)
        logger.info(
            "Logged %s for block %s on %s", payload.status.value, block.id, date_key(day)
        )
        return ExecutionLogResult(execution=execution, streak=streak)

    async def blocks_for_day(
        self, user_id: str, day: date
    ) -> tuple[Optional[Phase], list[RoutineBlockWithStatus]]:
        """Dated blocks of the active phase on a day, with their execution state."""
        phase = await self.phase_repo.get_active(user_id)
        if not phase:
            return None, []

        blocks = await self.block_repo.list_dated(phase.id, day, day)
        executions = await self.execution_repo.list_in_range(phase.id, day, day)
        status_by_block = {execution.routine_block_id: execution.status for execution in executions}

        return phase, [
            RoutineBlockWithStatus(
                **block.model_dump(),
                execution_status=(
                    ExecutionState(status_by_block[block.id].value)
                    if block.id in status_by_block
                    else ExecutionState.PENDING
                ),
            )
            for block in blocks
        ]

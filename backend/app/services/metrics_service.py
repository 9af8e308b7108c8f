"""
Dashboard metrics service.

Summarizes adherence of the active phase: streak, share of successful
days, today's progress and a warning when recent days were mostly skipped.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Optional

from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.models.enums import ExecutionStatus
from app.models.execution import RoutineExecution
from app.models.metrics import DashboardMetrics, PhaseMotivation, TodayBlocksSummary
from app.models.routine_block import RoutineBlock
from app.services.streak_service import DAY_SUCCESS_THRESHOLD, group_by_day, is_day_successful
from app.utils.datetime_utils import Clock

# A day is "mostly skipped" below this done ratio ...
MOSTLY_SKIPPED_DONE_RATIO = 0.3
# ... or above this share of SKIPPED among recorded executions.
MOSTLY_SKIPPED_SKIP_SHARE = 0.7
# Recent-window days that must be mostly skipped to raise the warning.
MOSTLY_SKIPPED_DAYS = 3


def is_mostly_skipped(blocks: list[RoutineBlock], executions: list[RoutineExecution]) -> bool:
    """Day with blocks where little was done; no record at all also counts."""
    if not blocks:
        return False
    block_ids = {block.id for block in blocks}
    recorded = [e for e in executions if e.routine_block_id in block_ids]
    if not recorded:
        return True

    done = sum(1 for e in recorded if e.status == ExecutionStatus.DONE)
    skipped = sum(1 for e in recorded if e.status == ExecutionStatus.SKIPPED)
    return (
        done / len(blocks) < MOSTLY_SKIPPED_DONE_RATIO
        or skipped / len(recorded) > MOSTLY_SKIPPED_SKIP_SHARE
    )


def adherence_percent(
    blocks: list[RoutineBlock],
    executions: list[RoutineExecution],
    threshold: float = DAY_SUCCESS_THRESHOLD,
) -> Optional[int]:
    """Percent of days having blocks that were successful; None without any such day."""
    blocks_by_day = group_by_day(blocks, lambda block: block.date)
    if not blocks_by_day:
        return None
    executions_by_day = group_by_day(executions, lambda execution: execution.date)

    successful = sum(
        1
        for key, day_blocks in blocks_by_day.items()
        if is_day_successful(day_blocks, executions_by_day.get(key, []), threshold)
    )
    return math.floor(successful / len(blocks_by_day) * 100 + 0.5)


class MetricsService:
    """Builds the dashboard snapshot of the active phase."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        execution_repo: IRoutineExecutionRepository,
        clock: Optional[Clock] = None,
        threshold: float = DAY_SUCCESS_THRESHOLD,
        recent_days: int = 5,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.execution_repo = execution_repo
        self.clock = clock or Clock()
        self.threshold = threshold
        self.recent_days = recent_days

    async def get_dashboard(self, user_id: str) -> DashboardMetrics:
        phase = await self.phase_repo.get_active(user_id)
        if not phase:
            return DashboardMetrics()

        today = self.clock.today()
        calculation_end = min(phase.end_date, today)
        recent_start = today - timedelta(days=self.recent_days - 1)

        # One read covers adherence, today and the recent window.
        fetch_start = min(phase.start_date, recent_start)
        blocks = await self.block_repo.list_dated(phase.id, fetch_start, today)
        executions = await self.execution_repo.list_in_range(phase.id, fetch_start, today)

        def within(day: date, start: date, end: date) -> bool:
            return start <= day <= end

        adherence = adherence_percent(
            [b for b in blocks if within(b.date, phase.start_date, calculation_end)],
            [e for e in executions if within(e.date, phase.start_date, calculation_end)],
            self.threshold,
        )

        today_blocks = [b for b in blocks if b.date == today]
        today_ids = {b.id for b in today_blocks}
        completed_today = sum(
            1
            for e in executions
            if e.date == today and e.routine_block_id in today_ids and e.status == ExecutionStatus.DONE
        )

        recent_blocks = group_by_day(
            [b for b in blocks if within(b.date, recent_start, today)], lambda b: b.date
        )
        recent_executions = group_by_day(
            [e for e in executions if within(e.date, recent_start, today)], lambda e: e.date
        )
        mostly_skipped_days = sum(
            1
            for key, day_blocks in recent_blocks.items()
            if is_mostly_skipped(day_blocks, recent_executions.get(key, []))
        )

        return DashboardMetrics(
            phase_id=phase.id,
            streak=phase.current_streak,
            longest_streak=phase.longest_streak,
            adherence=adherence,
            today_blocks=TodayBlocksSummary(total=len(today_blocks), completed=completed_today),
            phase_motivation=PhaseMotivation(why=phase.why, outcome=phase.outcome),
            has_recent_skipped_pattern=mostly_skipped_days >= MOSTLY_SKIPPED_DAYS,
        )

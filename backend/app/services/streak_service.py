"""
Streak service.

Classifies phase days as successful and recomputes the phase streaks from
the stored blocks and executions. Every recalculation reads the whole
range again, so calling it twice without data changes gives the same result.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Optional, Sequence, TypeVar
from uuid import UUID

from app.core.exceptions import NotFoundError
from app.core.logger import setup_logger
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.models.enums import ExecutionStatus
from app.models.execution import RoutineExecution
from app.models.phase import Phase, StreakSummary
from app.models.routine_block import RoutineBlock
from app.utils.calendar_utils import date_key, enumerate_days
from app.utils.datetime_utils import Clock

logger = setup_logger(__name__)

DAY_SUCCESS_THRESHOLD = 0.7

T = TypeVar("T")


def is_day_successful(
    scheduled_blocks: Sequence[RoutineBlock],
    executions: Iterable[RoutineExecution],
    threshold: float = DAY_SUCCESS_THRESHOLD,
) -> bool:
    """
    Decide whether a day counts towards the streak.

    A day without scheduled blocks is never successful. SKIPPED and missing
    executions both count as not done.
    """
    if not scheduled_blocks:
        return False

    scheduled_ids = {block.id for block in scheduled_blocks}
    done_ids = {
        execution.routine_block_id
        for execution in executions
        if execution.status == ExecutionStatus.DONE
        and execution.routine_block_id in scheduled_ids
    }
    return len(done_ids) / len(scheduled_blocks) >= threshold


def group_by_day(items: Iterable[T], get_day: Callable[[T], Optional[date]]) -> dict[str, list[T]]:
    """Group items by the date key of their day, skipping undated items."""
    grouped: dict[str, list[T]] = defaultdict(list)
    for item in items:
        day = get_day(item)
        if day is not None:
            grouped[date_key(day)].append(item)
    return grouped


def classify_days(
    days: Sequence[date],
    blocks: Iterable[RoutineBlock],
    executions: Iterable[RoutineExecution],
    threshold: float = DAY_SUCCESS_THRESHOLD,
) -> list[bool]:
    """Success flag for each day, from blocks and executions fetched for the whole range."""
    blocks_by_day = group_by_day(blocks, lambda block: block.date)
    executions_by_day = group_by_day(executions, lambda execution: execution.date)
    return [
        is_day_successful(
            blocks_by_day.get(date_key(day), []),
            executions_by_day.get(date_key(day), []),
            threshold,
        )
        for day in days
    ]


def trailing_run(flags: Sequence[bool]) -> int:
    """Number of consecutive True values at the end of flags."""
    count = 0
    for flag in reversed(flags):
        if not flag:
            break
        count += 1
    return count


def longest_run(flags: Sequence[bool]) -> int:
    """Length of the longest run of consecutive True values."""
    best = 0
    running = 0
    for flag in flags:
        if flag:
            running += 1
            best = max(best, running)
        else:
            running = 0
    return best


class StreakService:
    """Recomputes and persists current/longest streaks of a phase."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        execution_repo: IRoutineExecutionRepository,
        clock: Optional[Clock] = None,
        threshold: float = DAY_SUCCESS_THRESHOLD,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.execution_repo = execution_repo
        self.clock = clock or Clock()
        self.threshold = threshold

    def calculation_range(self, phase: Phase) -> tuple[date, date]:
        """Phase range clipped to today. end < start when the phase has not begun."""
        today = self.clock.today()
        end = phase.end_date if phase.end_date < today else today
        return phase.start_date, end

    async def day_statuses(self, phase: Phase) -> list[bool]:
        """Success flag of every day from phase start to min(phase end, today)."""
        start, end = self.calculation_range(phase)
        days = enumerate_days(start, end)
        if not days:
            return []

        blocks = await self.block_repo.list_dated(phase.id, start, end)
        executions = await self.execution_repo.list_in_range(phase.id, start, end)
        return classify_days(days, blocks, executions, self.threshold)

    async def recalculate(self, user_id: str, phase_id: UUID) -> StreakSummary:
        """
        Recompute both streaks for a phase and persist them.

        The stored longest streak is a high-water mark: it is never lowered,
        even when older executions are edited afterwards.

        Raises:
            NotFoundError: If the phase does not exist for the user
        """
        phase = await self.phase_repo.get_by_id(user_id, phase_id)
        if not phase:
            raise NotFoundError(f"Phase {phase_id} not found")

        statuses = await self.day_statuses(phase)
        current = trailing_run(statuses)
        longest = max(longest_run(statuses), phase.longest_streak, current)

        await self.phase_repo.update_streaks(user_id, phase.id, current, longest)
        logger.info(
            "Recalculated streak for phase %s over %d day(s): current=%d longest=%d",
            phase.id,
            len(statuses),
            current,
            longest,
        )
        return StreakSummary(current_streak=current, longest_streak=longest)

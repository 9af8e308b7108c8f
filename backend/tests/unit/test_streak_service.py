"""
Unit tests for day classification and streak recalculation.
"""

from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.exceptions import NotFoundError
from app.models.enums import ExecutionStatus
from app.models.execution import RoutineExecution
from app.models.routine_block import RoutineBlock, RoutineBlockDraft
from app.services.streak_service import (
    StreakService,
    classify_days,
    is_day_successful,
    longest_run,
    trailing_run,
)
from app.utils.datetime_utils import FixedClock
from factories import PHASE_START, make_phase_create

PHASE_ID = uuid4()


def _block(day: date, start_time: str = "09:00") -> RoutineBlock:
    return RoutineBlock(
        id=uuid4(),
        phase_id=PHASE_ID,
        title="Block",
        start_time=start_time,
        end_time="23:00",
        date=day,
        created_at=datetime(2025, 1, 1),
    )


def _execution(block: RoutineBlock, status: ExecutionStatus = ExecutionStatus.DONE) -> RoutineExecution:
    return RoutineExecution(
        id=uuid4(),
        routine_block_id=block.id,
        phase_id=PHASE_ID,
        date=block.date,
        status=status,
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 1),
    )


class TestIsDaySuccessful:
    def test_seven_of_ten_done_passes(self):
        blocks = [_block(PHASE_START) for _ in range(10)]
        executions = [_execution(b) for b in blocks[:7]]
        assert is_day_successful(blocks, executions)

    def test_six_of_ten_done_fails(self):
        blocks = [_block(PHASE_START) for _ in range(10)]
        executions = [_execution(b) for b in blocks[:6]]
        assert not is_day_successful(blocks, executions)

    def test_day_without_blocks_fails(self):
        assert not is_day_successful([], [])

    def test_skipped_counts_as_not_done(self):
        blocks = [_block(PHASE_START)]
        assert not is_day_successful(blocks, [_execution(blocks[0], ExecutionStatus.SKIPPED)])

    def test_executions_of_other_blocks_are_ignored(self):
        blocks = [_block(PHASE_START)]
        stray = _execution(_block(PHASE_START))
        assert not is_day_successful(blocks, [stray])

    def test_custom_threshold(self):
        blocks = [_block(PHASE_START) for _ in range(2)]
        executions = [_execution(blocks[0])]
        assert is_day_successful(blocks, executions, threshold=0.5)


class TestRuns:
    def test_trailing_and_longest(self):
        flags = [True, True, False, True, True]
        assert trailing_run(flags) == 2
        assert longest_run(flags) == 2

    def test_trailing_run_broken_by_last_day(self):
        assert trailing_run([True, True, True, False]) == 0
        assert longest_run([True, True, True, False]) == 3

    def test_empty(self):
        assert trailing_run([]) == 0
        assert longest_run([]) == 0


def test_classify_days_groups_by_calendar_day():
    day1, day2 = PHASE_START, PHASE_START + timedelta(days=1)
    b1, b2 = _block(day1), _block(day2)
    flags = classify_days([day1, day2], [b1, b2], [_execution(b2)])
    assert flags == [False, True]


@pytest.mark.asyncio
async def test_recalculate_unknown_phase_raises():
    phase_repo = AsyncMock()
    phase_repo.get_by_id.return_value = None
    service = StreakService(phase_repo, AsyncMock(), AsyncMock(), clock=FixedClock(PHASE_START))

    with pytest.raises(NotFoundError):
        await service.recalculate("user", uuid4())

    phase_repo.update_streaks.assert_not_called()


async def _schedule_one_block_per_day(phase, block_repo, category_id, days):
    drafts = [
        RoutineBlockDraft(
            category_id=category_id,
            title="Morning pages",
            start_time="07:00",
            end_time="07:30",
            color="primary",
            date=day,
        )
        for day in days
    ]
    return await block_repo.replace_all_dated(phase.id, drafts)


@pytest.mark.asyncio
async def test_recalculate_is_idempotent_and_persisted(
    phase_repo, block_repo, execution_repo, category_repo, test_user_id
):
    """Two recalculations without data changes produce the same stored values."""
    phase = await phase_repo.create(test_user_id, make_phase_create(duration_days=5))
    category = await category_repo.get_or_create(test_user_id, "Focus")
    days = [PHASE_START + timedelta(days=i) for i in range(5)]
    blocks = await _schedule_one_block_per_day(phase, block_repo, category.id, days)

    # Pattern T, T, F, T, T
    for block in blocks:
        if block.date != days[2]:
            await execution_repo.upsert(phase.id, block.id, block.date, ExecutionStatus.DONE)

    service = StreakService(
        phase_repo, block_repo, execution_repo, clock=FixedClock(days[-1])
    )
    first = await service.recalculate(test_user_id, phase.id)
    second = await service.recalculate(test_user_id, phase.id)

    assert first.current_streak == 2
    assert first.longest_streak == 2
    assert second == first

    stored = await phase_repo.get_by_id(test_user_id, phase.id)
    assert stored.current_streak == 2
    assert stored.longest_streak == 2


@pytest.mark.asyncio
async def test_range_is_clipped_to_today(
    phase_repo, block_repo, execution_repo, category_repo, test_user_id
):
    """Days after today are not classified, so pending future days do not break the streak."""
    phase = await phase_repo.create(test_user_id, make_phase_create(duration_days=7))
    category = await category_repo.get_or_create(test_user_id, "Focus")
    days = [PHASE_START + timedelta(days=i) for i in range(7)]
    blocks = await _schedule_one_block_per_day(phase, block_repo, category.id, days)

    for block in blocks[:3]:
        await execution_repo.upsert(phase.id, block.id, block.date, ExecutionStatus.DONE)

    service = StreakService(
        phase_repo, block_repo, execution_repo, clock=FixedClock(days[2])
    )
    summary = await service.recalculate(test_user_id, phase.id)

    assert summary.current_streak == 3
    assert summary.longest_streak == 3


@pytest.mark.asyncio
async def test_longest_streak_never_decreases(
    phase_repo, block_repo, execution_repo, category_repo, test_user_id
):
    phase = await phase_repo.create(test_user_id, make_phase_create(duration_days=3))
    category = await category_repo.get_or_create(test_user_id, "Focus")
    days = [PHASE_START + timedelta(days=i) for i in range(3)]
    blocks = await _schedule_one_block_per_day(phase, block_repo, category.id, days)

    for block in blocks:
        await execution_repo.upsert(phase.id, block.id, block.date, ExecutionStatus.DONE)

    service = StreakService(
        phase_repo, block_repo, execution_repo, clock=FixedClock(days[-1])
    )
    assert (await service.recalculate(test_user_id, phase.id)).longest_streak == 3

    # Rewrite history: the middle day is now skipped
    await execution_repo.upsert(phase.id, blocks[1].id, days[1], ExecutionStatus.SKIPPED)
    summary = await service.recalculate(test_user_id, phase.id)

    assert summary.current_streak == 1
    assert summary.longest_streak == 3


@pytest.mark.asyncio
async def test_phase_not_started_keeps_longest(
    phase_repo, block_repo, execution_repo, test_user_id
):
    phase = await phase_repo.create(test_user_id, make_phase_create())
    await phase_repo.update_streaks(test_user_id, phase.id, 0, 4)

    service = StreakService(
        phase_repo,
        block_repo,
        execution_repo,
        clock=FixedClock(PHASE_START - timedelta(days=1)),
    )
    summary = await service.recalculate(test_user_id, phase.id)

    assert summary.current_streak == 0
    assert summary.longest_streak == 4

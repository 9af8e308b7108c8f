"""
Tests for per-day schedules and scoped bulk edits.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError as SchemaError

from app.core.exceptions import (
    EmptySelectionError,
    InvalidScopeError,
    NotFoundError,
    OverlapConflictError,
    ValidationError,
)
from app.models.enums import ClonePolicy, EditScope, ExecutionStatus
from app.models.routine_block import RoutineBlockInput
from app.services.day_blocks_service import DayBlocksService, resolve_target_dates
from app.services.routine_clone_service import RoutineCloneService
from app.services.routine_template_service import RoutineTemplateService
from app.utils.datetime_utils import FixedClock
from factories import PHASE_START, make_block, make_phase_create

PHASE_DAYS = [PHASE_START + timedelta(days=i) for i in range(30)]
PHASE_END = PHASE_DAYS[-1]


class TestResolveTargetDates:
    def test_day(self):
        assert resolve_target_dates(EditScope.DAY, PHASE_DAYS[4], PHASE_END) == [PHASE_DAYS[4]]

    def test_future_runs_to_phase_end(self):
        days = resolve_target_dates(EditScope.FUTURE, PHASE_DAYS[9], PHASE_END)
        assert days == PHASE_DAYS[9:]

    def test_selected_is_sorted_and_deduplicated(self):
        days = resolve_target_dates(
            EditScope.SELECTED,
            PHASE_DAYS[0],
            PHASE_END,
            [PHASE_DAYS[5], PHASE_DAYS[2], PHASE_DAYS[5]],
        )
        assert days == [PHASE_DAYS[2], PHASE_DAYS[5]]

    def test_selected_without_dates(self):
        with pytest.raises(EmptySelectionError):
            resolve_target_dates(EditScope.SELECTED, PHASE_DAYS[0], PHASE_END, [])


@pytest.fixture
def service(phase_repo, block_repo, category_repo):
    return DayBlocksService(
        phase_repo, block_repo, category_repo, clock=FixedClock(PHASE_DAYS[9])
    )


@pytest.fixture
async def cloned_phase(phase_repo, block_repo, category_repo, test_user_id):
    """A 30-day phase with one 'Workout' block on every day."""
    phase = await phase_repo.create(test_user_id, make_phase_create(duration_days=30))
    await RoutineTemplateService(phase_repo, block_repo, category_repo).replace_templates(
        test_user_id, phase.id, [make_block("Workout", "07:00", "08:00")]
    )
    await RoutineCloneService(phase_repo, block_repo, category_repo).clone(
        test_user_id, phase.id, ClonePolicy.ALL
    )
    return phase


def _titles_by_day(blocks):
    result = {}
    for block in blocks:
        result.setdefault(block.date, []).append(block.title)
    return result


@pytest.mark.asyncio
async def test_future_scope_rewrites_from_anchor_to_end(
    service, block_repo, cloned_phase, test_user_id
):
    result = await service.apply_scoped_edit(
        test_user_id,
        cloned_phase.id,
        PHASE_DAYS[9],
        [make_block("Run", "06:00", "07:00"), make_block("Read", "21:00", "22:00")],
        "future",
    )

    assert result.dates_updated == PHASE_DAYS[9:]
    assert len(result.blocks) == 2 * 21

    by_day = _titles_by_day(await block_repo.list_dated(cloned_phase.id, PHASE_START, PHASE_END))
    for day in PHASE_DAYS[:9]:
        assert by_day[day] == ["Workout"]
    for day in PHASE_DAYS[9:]:
        assert by_day[day] == ["Run", "Read"]


@pytest.mark.asyncio
async def test_day_scope_touches_only_anchor(service, block_repo, cloned_phase, test_user_id):
    await service.apply_scoped_edit(
        test_user_id,
        cloned_phase.id,
        PHASE_DAYS[3],
        [make_block("Rest", "10:00", "11:00")],
        EditScope.DAY,
    )

    by_day = _titles_by_day(await block_repo.list_dated(cloned_phase.id, PHASE_START, PHASE_END))
    assert by_day[PHASE_DAYS[3]] == ["Rest"]
    assert by_day[PHASE_DAYS[2]] == ["Workout"]
    assert by_day[PHASE_DAYS[4]] == ["Workout"]


@pytest.mark.asyncio
async def test_selected_scope(service, block_repo, cloned_phase, test_user_id):
    selected = [PHASE_DAYS[20], PHASE_DAYS[1]]
    result = await service.apply_scoped_edit(
        test_user_id,
        cloned_phase.id,
        PHASE_DAYS[0],
        [make_block("Swim", "18:00", "19:00", category="Health")],
        "selected",
        selected,
    )

    assert result.dates_updated == [PHASE_DAYS[1], PHASE_DAYS[20]]
    by_day = _titles_by_day(await block_repo.list_dated(cloned_phase.id, PHASE_START, PHASE_END))
    assert by_day[PHASE_DAYS[1]] == ["Swim"]
    assert by_day[PHASE_DAYS[20]] == ["Swim"]
    assert by_day[PHASE_DAYS[0]] == ["Workout"]


@pytest.mark.asyncio
async def test_empty_block_list_clears_the_day(service, block_repo, cloned_phase, test_user_id):
    await service.apply_scoped_edit(
        test_user_id, cloned_phase.id, PHASE_DAYS[5], [], EditScope.DAY
    )

    assert await block_repo.list_dated(cloned_phase.id, PHASE_DAYS[5], PHASE_DAYS[5]) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("scope", ["day", "future"])
async def test_overlap_leaves_schedule_unchanged(
    scope, service, block_repo, cloned_phase, test_user_id
):
    before = await block_repo.list_dated(cloned_phase.id, PHASE_START, PHASE_END)

    with pytest.raises(OverlapConflictError):
        await service.apply_scoped_edit(
            test_user_id,
            cloned_phase.id,
            PHASE_DAYS[9],
            [make_block("Gym", "09:00", "10:00"), make_block("Email", "09:30", "10:30")],
            scope,
        )

    after = await block_repo.list_dated(cloned_phase.id, PHASE_START, PHASE_END)
    assert [b.id for b in after] == [b.id for b in before]


@pytest.mark.asyncio
async def test_invalid_scope(service, cloned_phase, test_user_id):
    with pytest.raises(InvalidScopeError):
        await service.apply_scoped_edit(
            test_user_id, cloned_phase.id, PHASE_DAYS[0], [], "week"
        )


@pytest.mark.asyncio
async def test_selected_scope_without_dates(service, cloned_phase, test_user_id):
    with pytest.raises(EmptySelectionError):
        await service.apply_scoped_edit(
            test_user_id, cloned_phase.id, PHASE_DAYS[0], [], "selected", []
        )


@pytest.mark.asyncio
async def test_date_outside_phase(service, cloned_phase, test_user_id):
    with pytest.raises(ValidationError):
        await service.apply_scoped_edit(
            test_user_id,
            cloned_phase.id,
            PHASE_END + timedelta(days=1),
            [make_block("Run", "06:00", "07:00")],
            EditScope.DAY,
        )


@pytest.mark.asyncio
async def test_unknown_phase(service, test_user_id, phase_repo):
    phase = await phase_repo.create(test_user_id, make_phase_create())

    with pytest.raises(NotFoundError):
        await service.apply_scoped_edit("someone_else", phase.id, PHASE_START, [], EditScope.DAY)


@pytest.mark.asyncio
async def test_list_phase_days(service, cloned_phase, test_user_id):
    days = await service.list_phase_days(test_user_id, cloned_phase.id)

    assert len(days) == 30
    assert days[0].day_number == 1
    assert days[0].date == PHASE_START
    assert days[9].is_today
    assert days[8].is_past and not days[8].is_today
    assert days[10].is_future
    assert [b.title for b in days[0].blocks] == ["Workout"]


@pytest.mark.asyncio
async def test_list_day_blocks(service, cloned_phase, test_user_id):
    blocks = await service.list_day_blocks(test_user_id, cloned_phase.id, PHASE_DAYS[2])

    assert len(blocks) == 1
    assert blocks[0].date == PHASE_DAYS[2]


@pytest.mark.asyncio
async def test_day_scope_drops_only_replaced_executions(
    service, block_repo, execution_repo, cloned_phase, test_user_id
):
    for day in PHASE_DAYS[:2]:
        [block] = await block_repo.list_dated(cloned_phase.id, day, day)
        await execution_repo.upsert(cloned_phase.id, block.id, day, ExecutionStatus.DONE)

    await service.apply_scoped_edit(
        test_user_id,
        cloned_phase.id,
        PHASE_DAYS[0],
        [make_block("Stretch", "07:00", "07:30")],
        EditScope.DAY,
    )

    remaining = await execution_repo.list_in_range(cloned_phase.id, PHASE_START, PHASE_END)
    assert [e.date for e in remaining] == [PHASE_DAYS[1]]


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_blank_block_title_rejected(title):
    with pytest.raises(SchemaError):
        RoutineBlockInput(title=title, start_time="06:00", end_time="06:30")


def test_block_title_is_stripped():
    block = RoutineBlockInput(title="  Run  ", start_time="06:00", end_time="06:30")
    assert block.title == "Run"

"""
Day blocks service.

Reads the dated schedule of a phase and applies scoped bulk edits: a new
block set replaces the schedule of one day, of a day and every later day
of the phase, or of an explicit selection of days. Input is validated in
full before anything is written.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from app.core.exceptions import (
    EmptySelectionError,
    InvalidScopeError,
    NotFoundError,
    ValidationError,
)
from app.core.logger import setup_logger
from app.interfaces.category_repository import ICategoryRepository
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.models.enums import EditScope
from app.models.phase import Phase
from app.models.routine_block import (
    DayBlocksResult,
    PhaseDay,
    RoutineBlock,
    RoutineBlockDraft,
    RoutineBlockInput,
)
from app.services.category_resolver import DEFAULT_CATEGORY_NAME, CategoryResolver
from app.services.streak_service import group_by_day
from app.utils.block_overlap import validate_day_blocks
from app.utils.calendar_utils import date_key, enumerate_days, unique_days
from app.utils.datetime_utils import Clock

logger = setup_logger(__name__)


def parse_scope(scope: str | EditScope) -> EditScope:
    """Raises InvalidScopeError for unknown values."""
    try:
        return EditScope(scope)
    except ValueError as exc:
        raise InvalidScopeError(scope) from exc


def resolve_target_dates(
    scope: EditScope,
    anchor_date: date,
    phase_end: date,
    selected_dates: Optional[list[date]] = None,
) -> list[date]:
    """Days a scoped edit applies to."""
    if scope == EditScope.DAY:
        return [anchor_date]
    if scope == EditScope.FUTURE:
        return enumerate_days(anchor_date, phase_end)
    if not selected_dates:
        raise EmptySelectionError()
    return sorted(unique_days(selected_dates))


class DayBlocksService:
    """Service for per-day schedules of a phase."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        category_repo: ICategoryRepository,
        clock: Optional[Clock] = None,
        default_color: str = "primary",
        default_category_name: str = DEFAULT_CATEGORY_NAME,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.category_repo = category_repo
        self.clock = clock or Clock()
        self.default_color = default_color
        self.default_category_name = default_category_name

    async def _get_phase(self, user_id: str, phase_id: UUID) -> Phase:
        phase = await self.phase_repo.get_by_id(user_id, phase_id)
        if not phase:
            raise NotFoundError(f"Phase {phase_id} not found")
        return phase

    async def list_day_blocks(self, user_id: str, phase_id: UUID, day: date) -> list[RoutineBlock]:
        phase = await self._get_phase(user_id, phase_id)
        return await self.block_repo.list_dated(phase.id, day, day)

    async def list_phase_days(self, user_id: str, phase_id: UUID) -> list[PhaseDay]:
        """Every day of the phase with its dated blocks."""
        phase = await self._get_phase(user_id, phase_id)
        today = self.clock.today()
        blocks = await self.block_repo.list_dated(phase.id, phase.start_date, phase.end_date)
        blocks_by_day = group_by_day(blocks, lambda block: block.date)

        return [
            PhaseDay(
                date=day,
                day_number=index,
                is_today=day == today,
                is_past=day < today,
                is_future=day > today,
                blocks=blocks_by_day.get(date_key(day), []),
            )
            for index, day in enumerate(enumerate_days(phase.start_date, phase.end_date), start=1)
        ]

    async def apply_scoped_edit(
        self,
        user_id: str,
        phase_id: UUID,
        anchor_date: date,
        blocks: list[RoutineBlockInput],
        scope: str | EditScope,
        selected_dates: Optional[list[date]] = None,
    ) -> DayBlocksResult:
        """
        Replace the schedule of every target day with the given blocks.

        Raises:
            InvalidScopeError: Unknown scope
            EmptySelectionError: 'selected' scope without dates
            InvalidTimeRangeError / OverlapConflictError: Invalid block set
            ValidationError: Target day outside the phase
            NotFoundError: Phase does not exist for the user
        """
        edit_scope = parse_scope(scope)
        if edit_scope == EditScope.SELECTED and not selected_dates:
            raise EmptySelectionError()
        validate_day_blocks(blocks)

        phase = await self._get_phase(user_id, phase_id)
        target_dates = resolve_target_dates(edit_scope, anchor_date, phase.end_date, selected_dates)
        outside = [day for day in target_dates if not phase.start_date <= day <= phase.end_date]
        if not target_dates or outside:
            bad = outside[0] if outside else anchor_date
            raise ValidationError(
                f"Date {date_key(bad)} is outside phase "
                f"{date_key(phase.start_date)}..{date_key(phase.end_date)}"
            )

        resolver = CategoryResolver(self.category_repo, user_id, self.default_category_name)
        resolved = [(block, await resolver.resolve(block.category)) for block in blocks]
        drafts = [
            RoutineBlockDraft(
                category_id=category_id,
                title=block.title.strip(),
                note=(block.note or "").strip() or None,
                start_time=block.start_time,
                end_time=block.end_time,
                color=block.color or self.default_color,
                is_template=False,
                date=day,
            )
            for day in target_dates
            for block, category_id in resolved
        ]

        written = await self.block_repo.replace_dated_for_dates(phase.id, target_dates, drafts)
        logger.info(
            "Replaced blocks of phase %s on %d day(s) (scope=%s): %d block(s) written",
            phase.id,
            len(target_dates),
            edit_scope.value,
            len(written),
        )
        return DayBlocksResult(blocks=written, dates_updated=target_dates)

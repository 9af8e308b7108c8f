"""
Routine clone service.

Expands the template blocks of a phase into dated blocks for every target
day of the phase. Cloning is a wholesale replace: all previous dated blocks
of the phase, and their executions, are discarded.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from app.core.exceptions import NoDatesToCloneError, NoTemplateBlocksError, NotFoundError
from app.core.logger import setup_logger
from app.interfaces.category_repository import ICategoryRepository
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.models.enums import ClonePolicy
from app.models.routine_block import CloneRoutineResult, RoutineBlockDraft
from app.services.category_resolver import DEFAULT_CATEGORY_NAME, CategoryResolver
from app.utils.calendar_utils import enumerate_days, is_weekend_day

logger = setup_logger(__name__)


def select_clone_dates(
    start: date,
    end: date,
    policy: ClonePolicy,
    excluded_dates: Iterable[date] = (),
) -> list[date]:
    """
    Target days of a clone.

    The exclusion list is subtracted for every policy, not only CUSTOM.
    """
    excluded = set(excluded_dates)
    all_days = enumerate_days(start, end)

    if policy == ClonePolicy.WEEKDAYS:
        candidates = [day for day in all_days if not is_weekend_day(day)]
    elif policy == ClonePolicy.CUSTOM:
        candidates = [day for day in all_days if day not in excluded]
    else:
        candidates = all_days

    return [day for day in candidates if day not in excluded]


class RoutineCloneService:
    """Service for expanding template blocks across a phase."""

    def __init__(
        self,
        phase_repo: IPhaseRepository,
        block_repo: IRoutineBlockRepository,
        category_repo: ICategoryRepository,
        default_color: str = "primary",
        default_category_name: str = DEFAULT_CATEGORY_NAME,
    ):
        self.phase_repo = phase_repo
        self.block_repo = block_repo
        self.category_repo = category_repo
        self.default_color = default_color
        self.default_category_name = default_category_name

    async def clone(
        self,
        user_id: str,
        phase_id: UUID,
        policy: ClonePolicy = ClonePolicy.ALL,
        excluded_dates: Optional[Iterable[date]] = None,
    ) -> CloneRoutineResult:
        """
        Replace the dated blocks of a phase with copies of its template.

        Raises:
            NotFoundError: Phase does not exist for the user
            NoTemplateBlocksError: The phase has no template blocks
            NoDatesToCloneError: Policy and exclusions leave no day
        """
        phase = await self.phase_repo.get_by_id(user_id, phase_id)
        if not phase:
            raise NotFoundError(f"Phase {phase_id} not found")

        templates = await self.block_repo.list_templates(phase.id)
        if not templates:
            raise NoTemplateBlocksError()

        target_dates = select_clone_dates(
            phase.start_date, phase.end_date, policy, excluded_dates or ()
        )
        if not target_dates:
            raise NoDatesToCloneError()

        resolver = CategoryResolver(self.category_repo, user_id, self.default_category_name)
        category_ids = [
            await resolver.ensure(template.category_id, template.title) for template in templates
        ]

        drafts = [
            RoutineBlockDraft(
                category_id=category_id,
                title=template.title,
                note=template.note,
                start_time=template.start_time,
                end_time=template.end_time,
                color=template.color or self.default_color,
                is_template=False,
                date=day,
            )
            for day in target_dates
            for template, category_id in zip(templates, category_ids)
        ]

        created = await self.block_repo.replace_all_dated(phase.id, drafts)
        logger.info(
            "Cloned %d template block(s) of phase %s to %d day(s) (%s)",
            len(templates),
            phase.id,
            len(target_dates),
            policy.value,
        )
        return CloneRoutineResult(blocks_created=len(created), dates_cloned=len(target_dates))

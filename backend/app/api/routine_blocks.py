"""
Routine block API endpoints.

Template builder, template cloning and per-day schedule editing of a phase.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import (
    CurrentUser,
    DayBlocksSvc,
    RoutineCloneSvc,
    RoutineTemplateSvc,
    StreakSvc,
)
from app.core.exceptions import NotFoundError, PhaseflowError, ValidationError
from app.models.routine_block import (
    CloneRoutineRequest,
    CloneRoutineResult,
    DayBlocksResult,
    DayBlocksUpdate,
    PhaseDay,
    RoutineBlock,
    TemplateBlocksReplace,
)

router = APIRouter(prefix="/phases", tags=["routine-blocks"])


def _to_http(e: PhaseflowError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{phase_id}/routine-blocks", response_model=list[RoutineBlock])
async def list_template_blocks(
    phase_id: UUID,
    user: CurrentUser,
    service: RoutineTemplateSvc,
) -> list[RoutineBlock]:
    """List the template blocks of a phase."""
    try:
        return await service.list_templates(user.id, phase_id)
    except NotFoundError as e:
        raise _to_http(e)


@router.put("/{phase_id}/routine-blocks", response_model=list[RoutineBlock])
async def replace_template_blocks(
    phase_id: UUID,
    payload: TemplateBlocksReplace,
    user: CurrentUser,
    service: RoutineTemplateSvc,
) -> list[RoutineBlock]:
    """Replace the template blocks of a phase."""
    try:
        return await service.replace_templates(user.id, phase_id, payload.blocks)
    except (NotFoundError, ValidationError) as e:
        raise _to_http(e)


@router.post("/{phase_id}/clone-routine", response_model=CloneRoutineResult)
async def clone_routine(
    phase_id: UUID,
    payload: CloneRoutineRequest,
    user: CurrentUser,
    service: RoutineCloneSvc,
    streak_service: StreakSvc,
) -> CloneRoutineResult:
    """
    Expand the template over the phase.

    Existing dated blocks and their executions are replaced, so the stored
    streak is recalculated afterwards.
    """
    try:
        result = await service.clone(
            user.id, phase_id, payload.option, payload.excluded_dates
        )
    except (NotFoundError, ValidationError) as e:
        raise _to_http(e)

    await streak_service.recalculate(user.id, phase_id)
    return result


@router.get("/{phase_id}/days", response_model=list[PhaseDay])
async def list_phase_days(
    phase_id: UUID,
    user: CurrentUser,
    service: DayBlocksSvc,
) -> list[PhaseDay]:
    """Every day of a phase with its scheduled blocks."""
    try:
        return await service.list_phase_days(user.id, phase_id)
    except NotFoundError as e:
        raise _to_http(e)


@router.get("/{phase_id}/days/{day}/blocks", response_model=list[RoutineBlock])
async def list_day_blocks(
    phase_id: UUID,
    day: date,
    user: CurrentUser,
    service: DayBlocksSvc,
) -> list[RoutineBlock]:
    """Blocks scheduled on one day of a phase."""
    try:
        return await service.list_day_blocks(user.id, phase_id, day)
    except NotFoundError as e:
        raise _to_http(e)


@router.put("/{phase_id}/days/{day}/blocks", response_model=DayBlocksResult)
async def update_day_blocks(
    phase_id: UUID,
    day: date,
    payload: DayBlocksUpdate,
    user: CurrentUser,
    service: DayBlocksSvc,
    streak_service: StreakSvc,
) -> DayBlocksResult:
    """Replace the blocks of this day, the rest of the phase or selected days."""
    try:
        result = await service.apply_scoped_edit(
            user.id,
            phase_id,
            day,
            payload.blocks,
            payload.scope,
            payload.selected_dates,
        )
    except (NotFoundError, ValidationError) as e:
        raise _to_http(e)

    await streak_service.recalculate(user.id, phase_id)
    return result

"""
Phase API endpoints.

Provides lifecycle operations for phases.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, PhaseRepo, StreakSvc
from app.core.exceptions import NotFoundError
from app.models.phase import Phase, PhaseCreate, PhaseUpdate, StreakSummary

router = APIRouter(prefix="/phases", tags=["phases"])


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=Phase, status_code=status.HTTP_201_CREATED)
async def create_phase(
    phase: PhaseCreate,
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Create a new phase. It becomes the user's only active phase."""
    return await repo.create(user.id, phase)


@router.get("", response_model=list[Phase])
async def list_phases(
    user: CurrentUser,
    repo: PhaseRepo,
) -> list[Phase]:
    """List the user's phases, newest first."""
    return await repo.list(user.id)


@router.get("/active", response_model=Phase)
async def get_active_phase(
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Get the active phase."""
    phase = await repo.get_active(user.id)
    if not phase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active phase",
        )
    return phase


@router.get("/{phase_id}", response_model=Phase)
async def get_phase(
    phase_id: UUID,
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Get a phase by ID."""
    phase = await repo.get_by_id(user.id, phase_id)
    if not phase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Phase {phase_id} not found",
        )
    return phase


@router.patch("/{phase_id}", response_model=Phase)
async def update_phase(
    phase_id: UUID,
    phase: PhaseUpdate,
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Update the text fields of a phase."""
    try:
        return await repo.update(user.id, phase_id, phase)
    except NotFoundError as e:
        raise _not_found(e)


@router.delete("/{phase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_phase(
    phase_id: UUID,
    user: CurrentUser,
    repo: PhaseRepo,
) -> None:
    """Delete a phase together with its blocks, executions and timesheet."""
    deleted = await repo.delete(user.id, phase_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Phase {phase_id} not found",
        )


@router.post("/{phase_id}/activate", response_model=Phase)
async def activate_phase(
    phase_id: UUID,
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Make a phase the active one."""
    try:
        return await repo.activate(user.id, phase_id)
    except NotFoundError as e:
        raise _not_found(e)


@router.post("/{phase_id}/archive", response_model=Phase)
async def archive_phase(
    phase_id: UUID,
    user: CurrentUser,
    repo: PhaseRepo,
) -> Phase:
    """Mark a phase completed."""
    try:
        return await repo.archive(user.id, phase_id)
    except NotFoundError as e:
        raise _not_found(e)


@router.post("/{phase_id}/recalculate-streak", response_model=StreakSummary)
async def recalculate_streak(
    phase_id: UUID,
    user: CurrentUser,
    streak_service: StreakSvc,
) -> StreakSummary:
    """Recompute and store the phase's current and longest streak."""
    try:
        return await streak_service.recalculate(user.id, phase_id)
    except NotFoundError as e:
        raise _not_found(e)

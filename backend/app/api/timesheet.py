"""
Timesheet API endpoints.

Entries always belong to the user's active phase.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import CurrentUser, PhaseRepo, TimesheetRepo
from app.core.exceptions import NotFoundError
from app.interfaces.phase_repository import IPhaseRepository
from app.models.phase import Phase
from app.models.timesheet import TimesheetEntry, TimesheetEntryCreate, TimesheetEntryUpdate

router = APIRouter(prefix="/timesheet", tags=["timesheet"])


async def _get_active_phase_or_404(user_id: str, phase_repo: IPhaseRepository) -> Phase:
    phase = await phase_repo.get_active(user_id)
    if not phase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active phase",
        )
    return phase


@router.get("/entries", response_model=list[TimesheetEntry])
async def list_entries(
    user: CurrentUser,
    phase_repo: PhaseRepo,
    repo: TimesheetRepo,
    start: Optional[date] = Query(None, description="First day (inclusive)"),
    end: Optional[date] = Query(None, description="Last day (inclusive)"),
) -> list[TimesheetEntry]:
    """List timesheet entries of the active phase."""
    phase = await _get_active_phase_or_404(user.id, phase_repo)
    return await repo.list(phase.id, start=start, end=end)


@router.post("/entries", response_model=TimesheetEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: TimesheetEntryCreate,
    user: CurrentUser,
    phase_repo: PhaseRepo,
    repo: TimesheetRepo,
) -> TimesheetEntry:
    """Log unplanned time against the active phase."""
    phase = await _get_active_phase_or_404(user.id, phase_repo)
    return await repo.create(phase.id, payload)


@router.put("/entries/{entry_id}", response_model=TimesheetEntry)
async def update_entry(
    entry_id: UUID,
    payload: TimesheetEntryUpdate,
    user: CurrentUser,
    phase_repo: PhaseRepo,
    repo: TimesheetRepo,
) -> TimesheetEntry:
    """Replace a timesheet entry."""
    phase = await _get_active_phase_or_404(user.id, phase_repo)
    try:
        return await repo.update(phase.id, entry_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    user: CurrentUser,
    phase_repo: PhaseRepo,
    repo: TimesheetRepo,
) -> None:
    """Delete a timesheet entry."""
    phase = await _get_active_phase_or_404(user.id, phase_repo)
    deleted = await repo.delete(phase.id, entry_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Timesheet entry {entry_id} not found",
        )

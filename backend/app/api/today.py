"""
Today API endpoints.

Blocks of a day in the active phase and execution logging.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import AppClock, CurrentUser, ExecutionSvc
from app.core.exceptions import NotFoundError, ValidationError
from app.models.execution import ExecutionLog, ExecutionLogResult
from app.models.routine_block import RoutineBlockWithStatus

router = APIRouter(prefix="/today", tags=["today"])


@router.get("/blocks", response_model=list[RoutineBlockWithStatus])
async def get_day_blocks(
    user: CurrentUser,
    service: ExecutionSvc,
    clock: AppClock,
    day: Optional[date] = Query(None, alias="date", description="Defaults to today"),
) -> list[RoutineBlockWithStatus]:
    """Blocks of the active phase on a day with their execution state."""
    _, blocks = await service.blocks_for_day(user.id, day or clock.today())
    return blocks


@router.post("/executions", response_model=ExecutionLogResult)
async def log_execution(
    payload: ExecutionLog,
    user: CurrentUser,
    service: ExecutionSvc,
) -> ExecutionLogResult:
    """Record DONE or SKIPPED for a block and refresh the streak."""
    try:
        return await service.log(user.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

"""
Routine execution models.

An execution records what happened to one dated block on its day.
No record means the block is still pending.
"""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from app.models.enums import ExecutionStatus
from app.models.phase import StreakSummary


class ExecutionLog(BaseModel):
    """Payload for recording a block outcome."""

    routine_block_id: UUID
    status: ExecutionStatus
    date: Optional[dt.date] = None


class RoutineExecution(BaseModel):
    """Stored execution record."""

    id: UUID
    routine_block_id: UUID
    phase_id: UUID
    date: dt.date
    status: ExecutionStatus
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class ExecutionLogResult(BaseModel):
    """Execution write acknowledged together with the refreshed streak."""

    execution: RoutineExecution
    streak: StreakSummary

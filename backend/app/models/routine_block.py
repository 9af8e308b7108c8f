"""
Routine block models.

Template blocks (no date) describe the recurring daily pattern of a phase;
dated blocks are the concrete schedule of one day.
"""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.enums import ClonePolicy, EditScope, ExecutionState

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class RoutineBlockInput(BaseModel):
    """A block as submitted by the routine builder or the day editor."""

    title: str = Field(..., min_length=1, max_length=200)
    note: Optional[str] = Field(None, max_length=2000)
    start_time: str = Field(..., pattern=HHMM_PATTERN, description="HH:MM, local clock")
    end_time: str = Field(..., pattern=HHMM_PATTERN, description="HH:MM, local clock")
    category: Optional[str] = Field(None, max_length=100, description="Category name")
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


class RoutineBlockDraft(BaseModel):
    """A block ready to be written, with its category resolved."""

    category_id: UUID
    title: str
    note: Optional[str] = None
    start_time: str
    end_time: str
    color: str
    is_template: bool = False
    date: Optional[dt.date] = None


class RoutineBlock(BaseModel):
    """Stored routine block."""

    id: UUID
    phase_id: UUID
    category_id: Optional[UUID] = None
    category: Optional[str] = None
    title: str
    note: Optional[str] = None
    start_time: str
    end_time: str
    color: str = "primary"
    is_template: bool = False
    date: Optional[dt.date] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class RoutineBlockWithStatus(RoutineBlock):
    """Dated block with its execution state for that day."""

    execution_status: ExecutionState = ExecutionState.PENDING


class TemplateBlocksReplace(BaseModel):
    """Replace every template block of a phase."""

    blocks: list[RoutineBlockInput] = Field(..., min_length=1)


class CloneRoutineRequest(BaseModel):
    """Expand template blocks over the phase range."""

    option: ClonePolicy = ClonePolicy.ALL
    excluded_dates: list[dt.date] = Field(default_factory=list)


class CloneRoutineResult(BaseModel):
    blocks_created: int
    dates_cloned: int


class DayBlocksUpdate(BaseModel):
    """
    Replace the blocks of one or more days.

    scope is kept as a plain string so unknown values surface as the
    domain's InvalidScopeError rather than a schema error.
    """

    blocks: list[RoutineBlockInput] = Field(default_factory=list)
    scope: str = EditScope.DAY.value
    selected_dates: Optional[list[dt.date]] = None


class DayBlocksResult(BaseModel):
    blocks: list[RoutineBlock]
    dates_updated: list[dt.date]


class PhaseDay(BaseModel):
    """One calendar day of a phase with its schedule."""

    date: dt.date
    day_number: int
    is_today: bool
    is_past: bool
    is_future: bool
    blocks: list[RoutineBlock] = Field(default_factory=list)

"""
Timesheet entry models.

Unplanned time logged against the active phase.
"""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.enums import Priority
from app.models.routine_block import HHMM_PATTERN
from app.utils.block_overlap import time_to_minutes


class TimesheetEntryBase(BaseModel):
    """Base timesheet fields."""

    title: str = Field(..., min_length=1, max_length=200)
    note: Optional[str] = Field(None, max_length=2000)
    start_time: str = Field(..., pattern=HHMM_PATTERN)
    end_time: str = Field(..., pattern=HHMM_PATTERN)
    priority: Priority = Priority.MEDIUM
    date: dt.date

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("note")
    @classmethod
    def _strip_note(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def _check_range(self):
        if time_to_minutes(self.end_time) <= time_to_minutes(self.start_time):
            raise ValueError("End time must be after start time")
        return self


class TimesheetEntryCreate(TimesheetEntryBase):
    """Schema for creating a timesheet entry."""

    pass


class TimesheetEntryUpdate(TimesheetEntryBase):
    """Full replacement of a timesheet entry."""

    pass


class TimesheetEntry(BaseModel):
    """Stored timesheet entry."""

    id: UUID
    phase_id: UUID
    title: str
    note: Optional[str] = None
    start_time: str
    end_time: str
    priority: Priority
    date: dt.date
    created_at: dt.datetime

    class Config:
        from_attributes = True

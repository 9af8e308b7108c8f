"""
Phase model definitions.

A phase is a bounded run of calendar days, with a declared motivation,
over which a daily routine is followed.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PhaseBase(BaseModel):
    """Base phase fields."""

    name: str = Field(..., min_length=1, max_length=200, description="Phase name")
    why: str = Field(..., min_length=1, max_length=2000, description="Motivation for the phase")
    outcome: str = Field(..., min_length=1, max_length=2000, description="Expected outcome")


class PhaseCreate(PhaseBase):
    """Schema for creating a new phase."""

    duration_days: int = Field(..., ge=1, le=366, description="Length in days, start day included")
    start_date: date

    @property
    def end_date(self) -> date:
        """Last day of the phase (inclusive)."""
        return self.start_date + timedelta(days=self.duration_days - 1)


class PhaseUpdate(BaseModel):
    """Schema for updating an existing phase."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    why: Optional[str] = Field(None, min_length=1, max_length=2000)
    outcome: Optional[str] = Field(None, min_length=1, max_length=2000)


class Phase(PhaseBase):
    """Complete phase model."""

    id: UUID
    user_id: str = Field(..., description="Owner user ID")
    duration_days: int
    start_date: date
    end_date: date
    is_active: bool = False
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StreakSummary(BaseModel):
    """Result of a streak recalculation."""

    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)

"""
Dashboard metrics models.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TodayBlocksSummary(BaseModel):
    total: int = 0
    completed: int = 0


class PhaseMotivation(BaseModel):
    why: str
    outcome: str


class DashboardMetrics(BaseModel):
    """Adherence snapshot of the active phase."""

    phase_id: Optional[UUID] = None
    streak: int = 0
    longest_streak: int = 0
    adherence: Optional[int] = Field(
        None, ge=0, le=100, description="Percent of scheduled days that were successful"
    )
    today_blocks: TodayBlocksSummary = Field(default_factory=TodayBlocksSummary)
    phase_motivation: Optional[PhaseMotivation] = None
    has_recent_skipped_pattern: bool = False

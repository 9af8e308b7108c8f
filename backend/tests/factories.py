"""
Test data builders.
"""

from datetime import date

from app.models.phase import PhaseCreate
from app.models.routine_block import RoutineBlockInput

# Monday
PHASE_START = date(2025, 3, 3)


def make_phase_create(
    start_date: date = PHASE_START,
    duration_days: int = 7,
    name: str = "Deep Work Sprint",
) -> PhaseCreate:
    return PhaseCreate(
        name=name,
        why="Ship the thesis draft",
        outcome="Draft submitted",
        duration_days=duration_days,
        start_date=start_date,
    )


def make_block(
    title: str,
    start_time: str,
    end_time: str,
    category: str | None = None,
) -> RoutineBlockInput:
    return RoutineBlockInput(
        title=title,
        start_time=start_time,
        end_time=end_time,
        category=category,
    )

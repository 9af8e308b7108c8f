"""API routers."""

from app.api import (
    dashboard,
    phases,
    routine_blocks,
    timesheet,
    today,
)

__all__ = [
    "phases",
    "routine_blocks",
    "today",
    "dashboard",
    "timesheet",
]

"""Pydantic models (schemas) for the application."""

from app.models.enums import (
    ClonePolicy,
    EditScope,
    ExecutionState,
    ExecutionStatus,
    Priority,
)
from app.models.phase import Phase, PhaseCreate, PhaseUpdate, StreakSummary
from app.models.category import Category
from app.models.routine_block import (
    CloneRoutineRequest,
    CloneRoutineResult,
    DayBlocksResult,
    DayBlocksUpdate,
    PhaseDay,
    RoutineBlock,
    RoutineBlockDraft,
    RoutineBlockInput,
    RoutineBlockWithStatus,
    TemplateBlocksReplace,
)
from app.models.execution import ExecutionLog, ExecutionLogResult, RoutineExecution
from app.models.timesheet import (
    TimesheetEntry,
    TimesheetEntryCreate,
    TimesheetEntryUpdate,
)
from app.models.metrics import DashboardMetrics

__all__ = [
    # Enums
    "ClonePolicy",
    "EditScope",
    "ExecutionState",
    "ExecutionStatus",
    "Priority",
    # Phase
    "Phase",
    "PhaseCreate",
    "PhaseUpdate",
    "StreakSummary",
    # Category
    "Category",
    # Routine blocks
    "CloneRoutineRequest",
    "CloneRoutineResult",
    "DayBlocksResult",
    "DayBlocksUpdate",
    "PhaseDay",
    "RoutineBlock",
    "RoutineBlockDraft",
    "RoutineBlockInput",
    "RoutineBlockWithStatus",
    "TemplateBlocksReplace",
    # Executions
    "ExecutionLog",
    "ExecutionLogResult",
    "RoutineExecution",
    # Timesheet
    "TimesheetEntry",
    "TimesheetEntryCreate",
    "TimesheetEntryUpdate",
    # Metrics
    "DashboardMetrics",
]

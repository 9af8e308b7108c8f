"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.category_repository import ICategoryRepository
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.interfaces.timesheet_repository import ITimesheetRepository

__all__ = [
    "IAuthProvider",
    "ICategoryRepository",
    "IPhaseRepository",
    "IRoutineBlockRepository",
    "IRoutineExecutionRepository",
    "ITimesheetRepository",
]

"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that wire the SQLite
repositories, the clock and the services into the routers.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from app.core.config import get_settings
from app.interfaces.auth_provider import IAuthProvider, User
from app.interfaces.category_repository import ICategoryRepository
from app.interfaces.phase_repository import IPhaseRepository
from app.interfaces.routine_block_repository import IRoutineBlockRepository
from app.interfaces.routine_execution_repository import IRoutineExecutionRepository
from app.interfaces.timesheet_repository import ITimesheetRepository
from app.services.day_blocks_service import DayBlocksService
from app.services.execution_service import ExecutionService
from app.services.metrics_service import MetricsService
from app.services.routine_clone_service import RoutineCloneService
from app.services.routine_template_service import RoutineTemplateService
from app.services.streak_service import StreakService
from app.utils.datetime_utils import Clock


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_phase_repository() -> IPhaseRepository:
    """Get phase repository instance."""
    from app.infrastructure.local.phase_repository import SqlitePhaseRepository
    return SqlitePhaseRepository()


@lru_cache()
def get_category_repository() -> ICategoryRepository:
    """Get category repository instance."""
    from app.infrastructure.local.category_repository import SqliteCategoryRepository
    return SqliteCategoryRepository()


@lru_cache()
def get_routine_block_repository() -> IRoutineBlockRepository:
    """Get routine block repository instance."""
    from app.infrastructure.local.routine_block_repository import (
        SqliteRoutineBlockRepository,
    )
    return SqliteRoutineBlockRepository()


@lru_cache()
def get_routine_execution_repository() -> IRoutineExecutionRepository:
    """Get routine execution repository instance."""
    from app.infrastructure.local.routine_execution_repository import (
        SqliteRoutineExecutionRepository,
    )
    return SqliteRoutineExecutionRepository()


@lru_cache()
def get_timesheet_repository() -> ITimesheetRepository:
    """Get timesheet repository instance."""
    from app.infrastructure.local.timesheet_repository import SqliteTimesheetRepository
    return SqliteTimesheetRepository()


@lru_cache()
def get_clock() -> Clock:
    """Wall clock; overridden in tests to pin today."""
    return Clock()


# ===========================================
# Auth Dependencies
# ===========================================


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get authentication provider instance."""
    settings = get_settings()
    from app.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_REQUIRED)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    Without a required token, requests lacking an Authorization header
    act as the development user.
    """
    if not authorization:
        if not auth_provider.is_enabled():
            return User(id="dev_user")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    return await auth_provider.verify_token(token)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

PhaseRepo = Annotated[IPhaseRepository, Depends(get_phase_repository)]
CategoryRepo = Annotated[ICategoryRepository, Depends(get_category_repository)]
RoutineBlockRepo = Annotated[IRoutineBlockRepository, Depends(get_routine_block_repository)]
RoutineExecutionRepo = Annotated[
    IRoutineExecutionRepository, Depends(get_routine_execution_repository)
]
TimesheetRepo = Annotated[ITimesheetRepository, Depends(get_timesheet_repository)]
AppClock = Annotated[Clock, Depends(get_clock)]
CurrentUser = Annotated[User, Depends(get_current_user)]


# ===========================================
# Service Dependencies
# ===========================================


def get_streak_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    execution_repo: RoutineExecutionRepo,
    clock: AppClock,
) -> StreakService:
    return StreakService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        execution_repo=execution_repo,
        clock=clock,
        threshold=get_settings().DAY_SUCCESS_THRESHOLD,
    )


def get_routine_template_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    category_repo: CategoryRepo,
) -> RoutineTemplateService:
    settings = get_settings()
    return RoutineTemplateService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        category_repo=category_repo,
        default_color=settings.DEFAULT_BLOCK_COLOR,
        default_category_name=settings.DEFAULT_CATEGORY_NAME,
    )


def get_routine_clone_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    category_repo: CategoryRepo,
) -> RoutineCloneService:
    settings = get_settings()
    return RoutineCloneService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        category_repo=category_repo,
        default_color=settings.DEFAULT_BLOCK_COLOR,
        default_category_name=settings.DEFAULT_CATEGORY_NAME,
    )


def get_day_blocks_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    category_repo: CategoryRepo,
    clock: AppClock,
) -> DayBlocksService:
    settings = get_settings()
    return DayBlocksService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        category_repo=category_repo,
        clock=clock,
        default_color=settings.DEFAULT_BLOCK_COLOR,
        default_category_name=settings.DEFAULT_CATEGORY_NAME,
    )


StreakSvc = Annotated[StreakService, Depends(get_streak_service)]


def get_execution_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    execution_repo: RoutineExecutionRepo,
    streak_service: StreakSvc,
) -> ExecutionService:
    return ExecutionService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        execution_repo=execution_repo,
        streak_service=streak_service,
    )


def get_metrics_service(
    phase_repo: PhaseRepo,
    block_repo: RoutineBlockRepo,
    execution_repo: RoutineExecutionRepo,
    clock: AppClock,
) -> MetricsService:
    settings = get_settings()
    return MetricsService(
        phase_repo=phase_repo,
        block_repo=block_repo,
        execution_repo=execution_repo,
        clock=clock,
        threshold=settings.DAY_SUCCESS_THRESHOLD,
        recent_days=settings.RECENT_PATTERN_DAYS,
    )


RoutineTemplateSvc = Annotated[RoutineTemplateService, Depends(get_routine_template_service)]
RoutineCloneSvc = Annotated[RoutineCloneService, Depends(get_routine_clone_service)]
DayBlocksSvc = Annotated[DayBlocksService, Depends(get_day_blocks_service)]
ExecutionSvc = Annotated[ExecutionService, Depends(get_execution_service)]
MetricsSvc = Annotated[MetricsService, Depends(get_metrics_service)]

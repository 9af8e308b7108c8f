"""
Dashboard API endpoints.
"""

from fastapi import APIRouter

from app.api.deps import CurrentUser, MetricsSvc
from app.models.metrics import DashboardMetrics

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
async def get_metrics(
    user: CurrentUser,
    service: MetricsSvc,
) -> DashboardMetrics:
    """Streak and adherence of the active phase; empty when there is none."""
    return await service.get_dashboard(user.id)

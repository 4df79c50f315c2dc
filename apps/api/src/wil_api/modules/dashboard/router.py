"""
Dashboard Router

Endpoints:
- GET /dashboard/stats - Aggregate counts for the admin dashboard
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.core.database import get_db
from wil_api.core.errors import internal_error
from wil_api.modules.dashboard import service
from wil_api.modules.dashboard.schemas import DashboardStats

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard/stats",
    response_model=DashboardStats,
    summary="Get Dashboard Statistics",
)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)) -> DashboardStats:
    try:
        stats = await service.get_dashboard_stats(db)
    except Exception as e:
        raise internal_error(e, "load dashboard statistics") from e
    return DashboardStats(**stats)

"""Dashboard routes"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from club_portal.config import Settings
from club_portal.dependencies import get_app_settings, get_dashboard_service
from club_portal.models import DashboardResponse
from club_portal.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Query("", alias="userId"),
    today: Optional[date] = Query(None, description="Caller's local date (YYYY-MM-DD)"),
    dashboard: DashboardService = Depends(get_dashboard_service),
    settings: Settings = Depends(get_app_settings)
):
    """
    A member's projects, next sessions and upcoming event count.
    Clients re-poll every ``refreshSeconds`` rather than subscribing.
    """
    data = await dashboard.get_dashboard(user_id.strip(), today.isoformat() if today else None)
    return DashboardResponse(**data, refresh_seconds=settings.dashboard_refresh_seconds)

"""Dashboard models"""

from typing import List

from club_portal.models.base import ResponseModel
from club_portal.models.project import ProjectResponse
from club_portal.models.schedule import SessionResponse


class DashboardMember(ResponseModel):
    id: str
    name: str
    email: str
    role: str
    avatar: str


class DashboardStats(ResponseModel):
    active_projects: int
    upcoming_events: int
    upcoming_sessions: int


class DashboardResponse(ResponseModel):
    ok: bool = True
    member: DashboardMember
    stats: DashboardStats
    projects: List[ProjectResponse]
    sessions: List[SessionResponse]
    refresh_seconds: int  # Client polling interval

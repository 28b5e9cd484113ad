"""API Routes"""

from club_portal.routes import auth, dashboard, join_requests, members, project_interests, schedule

__all__ = ["auth", "dashboard", "join_requests", "members", "project_interests", "schedule"]

"""Member dashboard aggregation and upcoming schedule reads"""

import asyncio
import logging
from datetime import date
from typing import List, Optional

from club_portal.errors import InvalidInput, NotFound
from club_portal.services.document_store import (
    EVENTS,
    MEMBERS,
    PROJECT_MEMBERSHIPS,
    PROJECTS,
    SESSIONS,
    DocumentStore,
)

logger = logging.getLogger(__name__)


def resolve_today(today: Optional[str] = None) -> str:
    """Caller's calendar date as YYYY-MM-DD, defaulting to the server's local date.

    Dates are compared as strings, which works because the format is
    fixed-width and zero-padded.
    """
    if not today:
        return date.today().isoformat()
    try:
        return date.fromisoformat(today).isoformat()
    except ValueError:
        raise InvalidInput("Date must be in YYYY-MM-DD format") from None


class DashboardService:
    """Read-side composition across members, projects, sessions and events"""

    def __init__(self, store: DocumentStore, sessions_limit: int = 5):
        self.store = store
        self.sessions_limit = sessions_limit

    async def get_dashboard(self, user_id: str, today: Optional[str] = None) -> dict:
        """Summary of one member's projects, upcoming sessions and event count.

        Projects that no longer exist are skipped rather than failing the
        whole dashboard.
        """
        if not user_id:
            raise InvalidInput("User ID is required")
        today = resolve_today(today)

        member = await asyncio.to_thread(self.store.get, MEMBERS, user_id)
        if member is None:
            raise NotFound("Member not found")

        memberships = await asyncio.to_thread(self.store.find, PROJECT_MEMBERSHIPS, user_id=user_id)
        project_ids = list(dict.fromkeys(
            m["project_id"] for m in memberships if m.get("project_id")
        ))

        # Independent lookups, fetched concurrently
        fetched = await asyncio.gather(*(
            asyncio.to_thread(self.store.get, PROJECTS, project_id)
            for project_id in project_ids
        ))
        projects = [project for project in fetched if project is not None]
        if len(projects) < len(project_ids):
            logger.warning(
                f"Dashboard for {user_id}: {len(project_ids) - len(projects)} project reference(s) dangling"
            )

        sessions, upcoming_events = await asyncio.gather(
            asyncio.to_thread(self.upcoming_sessions, today, self.sessions_limit),
            asyncio.to_thread(self.store.count_range, EVENTS, "date", today),
        )

        logger.info(
            f"Dashboard for {user_id}: {len(projects)} projects, "
            f"{len(sessions)} sessions, {upcoming_events} events"
        )

        return {
            "member": {
                "id": member["id"],
                "name": (member.get("name") or "").strip() or "Member",
                "email": member.get("email") or "",
                "role": member.get("role") or "student",
                "avatar": member.get("avatar") or "",
            },
            "stats": {
                "active_projects": len(project_ids),
                "upcoming_events": upcoming_events,
                "upcoming_sessions": len(sessions),
            },
            "projects": projects,
            "sessions": sessions,
        }

    def upcoming_sessions(self, today: Optional[str] = None, limit: Optional[int] = None) -> List[dict]:
        """Sessions dated today or later, earliest first"""
        return self.store.find_range(
            SESSIONS, "date", resolve_today(today), order_by="date", limit=limit
        )

    def upcoming_events(self, today: Optional[str] = None) -> List[dict]:
        """Events dated today or later, earliest first"""
        return self.store.find_range(EVENTS, "date", resolve_today(today), order_by="date")

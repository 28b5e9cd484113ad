"""Project interest registration and admin decisions"""

import logging
from typing import List

from club_portal.errors import AlreadyDecided, InvalidInput, NotFound
from club_portal.services.document_store import (
    MEMBERS,
    PROJECT_INTERESTS,
    PROJECT_MEMBERSHIPS,
    PROJECTS,
    DocumentStore,
    now_iso,
)

logger = logging.getLogger(__name__)

INTEREST_STATUSES = ("pending", "approved", "held")
INTEREST_DECISIONS = ("approved", "held")

# status -> statuses it may move to
TRANSITIONS = {
    "pending": ("approved", "held"),
    "held": ("approved",),
    "approved": (),
}


class ProjectInterestService:
    """Project interest state machine: pending -> approved | held, held -> approved"""

    def __init__(self, store: DocumentStore):
        self.store = store

    def register_interest(self, project_id: str, user_id: str) -> dict:
        """Record a member's interest in a project.

        Repeated registrations for the same pair each create a record.
        """
        if not project_id or not user_id:
            raise InvalidInput("Missing project or user id")

        interest = self.store.insert(PROJECT_INTERESTS, {
            "project_id": project_id,
            "user_id": user_id,
            "status": "pending",
            "created_at": now_iso(),
        })
        logger.info(f"Project interest {interest['id']}: user {user_id} -> project {project_id}")
        return interest

    def list_interests(self, status: str = "pending") -> List[dict]:
        """Interests in one status, oldest first, with project/user display fields"""
        if status not in INTEREST_STATUSES:
            raise InvalidInput(f"Status must be one of: {', '.join(INTEREST_STATUSES)}")

        interests = self.store.find(PROJECT_INTERESTS, order_by="created_at", status=status)

        projects = {}
        members = {}
        for interest in interests:
            project_id = interest.get("project_id")
            if project_id not in projects:
                projects[project_id] = self.store.get(PROJECTS, project_id)
            user_id = interest.get("user_id")
            if user_id not in members:
                members[user_id] = self.store.get(MEMBERS, user_id)

            project = projects[project_id]
            member = members[user_id]
            interest["project_name"] = project.get("title") if project else None
            interest["user_name"] = member.get("name") if member else None
            interest["user_email"] = member.get("email") if member else None

        return interests

    def decide(self, interest_id: str, status: str, project_id: str, user_id: str) -> dict:
        """Move an interest to approved or held.

        Approval also links the user to the project in the same transaction,
        so the status change and the membership land together or not at all.
        """
        if status not in INTEREST_DECISIONS:
            raise InvalidInput("Status must be 'approved' or 'held'")
        if not interest_id or not project_id or not user_id:
            raise InvalidInput("Interest, project and user IDs are required")

        with self.store.transaction():
            interest = self.store.get(PROJECT_INTERESTS, interest_id)
            if interest is None:
                raise NotFound("Project interest not found")
            if interest.get("project_id") != project_id or interest.get("user_id") != user_id:
                raise InvalidInput("Project or user does not match this interest")

            current = interest.get("status", "pending")
            if status not in TRANSITIONS.get(current, ()):
                raise AlreadyDecided(f"Project interest already {current}")

            updated = self.store.update_if(
                PROJECT_INTERESTS,
                interest_id,
                {"status": current},
                {"status": status, "decided_at": now_iso()}
            )
            if updated is None:
                raise AlreadyDecided("Project interest was decided concurrently")

            if status == "approved":
                self._add_project_member(project_id, user_id, interest_id)

        logger.info(f"Project interest {interest_id} {current} -> {status}")
        return updated

    def _add_project_member(self, project_id: str, user_id: str, interest_id: str):
        if self.store.find(PROJECT_MEMBERSHIPS, project_id=project_id, user_id=user_id):
            logger.info(f"User {user_id} already a member of project {project_id}")
            return
        self.store.insert(PROJECT_MEMBERSHIPS, {
            "project_id": project_id,
            "user_id": user_id,
            "interest_id": interest_id,
            "joined_at": now_iso(),
        })
        logger.info(f"User {user_id} added to project {project_id}")

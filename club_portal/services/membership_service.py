"""Membership intake, admin decisions and member credentials"""

import hmac
import logging
from typing import List, Optional

from club_portal.errors import AlreadyDecided, InvalidInput, NotFound, Unauthorized
from club_portal.services.credentials import Credentials, derive_credentials, normalize_username
from club_portal.services.document_store import (
    MEMBERS,
    MEMBERSHIP_REQUESTS,
    DocumentStore,
    now_iso,
)

logger = logging.getLogger(__name__)

REQUEST_STATUSES = ("pending", "approved", "rejected")
DECISIONS = ("approved", "rejected")

# Fields copied from an approved request onto the new member
_COPIED_FIELDS = (
    "name", "email", "phone", "github", "portfolio",
    "interests", "role", "availability",
)


class MembershipService:
    """Membership request state machine: pending -> approved | rejected"""

    def __init__(self, store: DocumentStore):
        self.store = store

    # =========================================================================
    # Intake
    # =========================================================================

    def submit_request(self, application: dict) -> dict:
        """Store a new pending membership request"""
        request = {
            **application,
            "status": "pending",
            "created_at": now_iso(),
        }
        request = self.store.insert(MEMBERSHIP_REQUESTS, request)
        logger.info(f"Membership request received: {request['id']} ({request['email']})")
        return request

    def list_requests(self, status: str = "pending") -> List[dict]:
        """Requests in one status, oldest first"""
        if status not in REQUEST_STATUSES:
            raise InvalidInput(f"Status must be one of: {', '.join(REQUEST_STATUSES)}")
        return self.store.find(MEMBERSHIP_REQUESTS, order_by="created_at", status=status)

    # =========================================================================
    # Decisions
    # =========================================================================

    def decide(
        self,
        request_id: str,
        decision: str,
        admin_id: str,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> dict:
        """Approve or reject a pending request.

        Approval creates exactly one member carrying derived (or supplied)
        credentials and returns ``{"member_id", "credentials"}``; rejection
        returns ``{"member_id": None, "credentials": None}``. The request only
        moves if it is still pending when the write happens, so a repeated or
        racing decision fails with AlreadyDecided and creates nothing.
        """
        if decision not in DECISIONS:
            raise InvalidInput("Decision must be 'approved' or 'rejected'")
        if not request_id:
            raise InvalidInput("Request ID is required")
        if not admin_id:
            raise InvalidInput("Admin ID is required")

        with self.store.transaction():
            request = self.store.get(MEMBERSHIP_REQUESTS, request_id)
            if request is None:
                raise NotFound("Membership request not found")
            if request.get("status") != "pending":
                raise AlreadyDecided(f"Membership request already {request.get('status')}")

            changes = {
                "status": decision,
                "decided_by": admin_id,
                "decided_at": now_iso(),
            }
            member = None
            credentials = None

            if decision == "approved":
                credentials = derive_credentials(
                    request.get("name", ""),
                    username=normalize_username(username) if username else None,
                    password=password
                )
                member = self.store.insert(MEMBERS, self._member_from_request(request, credentials))
                changes["member_id"] = member["id"]

            if self.store.update_if(MEMBERSHIP_REQUESTS, request_id, {"status": "pending"}, changes) is None:
                raise AlreadyDecided("Membership request was decided concurrently")

        if member:
            logger.info(f"Membership request {request_id} approved by {admin_id}: member {member['id']} created")
            return {"member_id": member["id"], "credentials": credentials}

        logger.info(f"Membership request {request_id} rejected by {admin_id}")
        return {"member_id": None, "credentials": None}

    @staticmethod
    def _member_from_request(request: dict, credentials: Credentials) -> dict:
        member = {field: request.get(field) for field in _COPIED_FIELDS}
        member.update({
            "interests": list(request.get("interests") or []),
            "avatar": "",
            "username": credentials.username,
            "password": credentials.password,
            "badges": 0,
            "points": 0,
            "request_id": request["id"],
            "created_at": now_iso(),
        })
        return member

    # =========================================================================
    # Members
    # =========================================================================

    def get_member(self, member_id: str) -> dict:
        member = self.store.get(MEMBERS, member_id)
        if member is None:
            raise NotFound("Member not found")
        return member

    def update_credentials(
        self,
        member_id: str,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> Credentials:
        """Set a member's username/password, deriving omitted ones from their name"""
        if not member_id:
            raise InvalidInput("Member ID is required")

        with self.store.transaction():
            member = self.get_member(member_id)
            credentials = derive_credentials(
                member.get("name", ""),
                username=normalize_username(username) if username else None,
                password=password
            )
            self.store.update(MEMBERS, member_id, {
                "username": credentials.username,
                "password": credentials.password,
                "credentials_updated_at": now_iso(),
            })

        logger.info(f"Updated credentials for member {member_id} ({credentials.username})")
        return credentials

    def login(self, username: str, password: str, reveal_reason: bool = False) -> dict:
        """Return the member matching username/password or raise Unauthorized"""
        if not username or not password:
            raise InvalidInput("Username and password are required")

        normalized = normalize_username(username)
        matches = self.store.find(MEMBERS, username=normalized)

        if not matches:
            logger.warning(f"Login failed, no member with username: {normalized}")
            raise Unauthorized("No member found with that username." if reveal_reason else None)

        member = matches[0]
        stored = member.get("password") or ""
        if not hmac.compare_digest(stored.encode(), password.encode()):
            logger.warning(f"Login failed, incorrect password for: {normalized}")
            raise Unauthorized("Incorrect password. Try again." if reveal_reason else None)

        logger.info(f"Login successful for member {member['id']}")
        return member

"""Services module"""

from club_portal.services.dashboard_service import DashboardService
from club_portal.services.document_store import DocumentStore
from club_portal.services.membership_service import MembershipService
from club_portal.services.project_interest_service import ProjectInterestService
from club_portal.services.rsvp_service import RsvpService

__all__ = [
    "DocumentStore",
    "MembershipService",
    "ProjectInterestService",
    "RsvpService",
    "DashboardService",
]

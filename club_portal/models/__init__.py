"""Models package - Pydantic models for API request/response"""

from club_portal.models.base import Acknowledgement
from club_portal.models.dashboard import DashboardResponse
from club_portal.models.member import (
    CredentialsUpdateRequest,
    CredentialsUpdateResponse,
    LoginRequest,
    LoginResponse,
    MemberProfile,
)
from club_portal.models.membership import (
    MembershipDecisionRequest,
    MembershipDecisionResponse,
    MembershipRequestCreate,
    MembershipRequestListResponse,
)
from club_portal.models.project import (
    ProjectInterestCreate,
    ProjectInterestDecisionRequest,
    ProjectInterestDecisionResponse,
    ProjectInterestListResponse,
)
from club_portal.models.schedule import (
    EventListResponse,
    RsvpCreate,
    SessionListResponse,
)

__all__ = [
    "Acknowledgement",
    # Membership
    "MembershipRequestCreate",
    "MembershipDecisionRequest",
    "MembershipDecisionResponse",
    "MembershipRequestListResponse",
    # Members
    "LoginRequest",
    "LoginResponse",
    "MemberProfile",
    "CredentialsUpdateRequest",
    "CredentialsUpdateResponse",
    # Projects
    "ProjectInterestCreate",
    "ProjectInterestDecisionRequest",
    "ProjectInterestDecisionResponse",
    "ProjectInterestListResponse",
    # Schedule
    "RsvpCreate",
    "SessionListResponse",
    "EventListResponse",
    # Dashboard
    "DashboardResponse",
]

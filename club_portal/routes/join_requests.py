"""Membership request routes: intake and admin review"""

import logging

from fastapi import APIRouter, Depends, Query

from club_portal.config import Settings
from club_portal.dependencies import get_app_settings, get_membership_service
from club_portal.models import (
    Acknowledgement,
    MembershipDecisionRequest,
    MembershipDecisionResponse,
    MembershipRequestCreate,
    MembershipRequestListResponse,
)
from club_portal.models.membership import CredentialPair, MembershipRequestResponse
from club_portal.services.membership_service import MembershipService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=Acknowledgement, status_code=201)
async def submit_membership_request(
    request: MembershipRequestCreate,
    members: MembershipService = Depends(get_membership_service)
):
    """Submit the join form. The request waits for an admin decision."""
    created = members.submit_request(request.model_dump())
    return Acknowledgement(message="Request received.", id=created["id"])


@router.get("", response_model=MembershipRequestListResponse)
async def list_membership_requests(
    status: str = Query("pending", description="pending, approved or rejected"),
    members: MembershipService = Depends(get_membership_service),
    settings: Settings = Depends(get_app_settings)
):
    """Membership requests in one status (admin review queue by default)"""
    requests = members.list_requests(status)
    return MembershipRequestListResponse(
        data=[MembershipRequestResponse.model_validate(r) for r in requests],
        total=len(requests),
        refresh_seconds=settings.admin_refresh_seconds
    )


@router.patch("", response_model=MembershipDecisionResponse)
async def decide_membership_request(
    request: MembershipDecisionRequest,
    members: MembershipService = Depends(get_membership_service)
):
    """
    Approve or reject a pending membership request.
    On approval the new member's credentials are returned so the admin can
    send them on; nothing is emailed automatically.
    """
    result = members.decide(
        request_id=request.request_id,
        decision=request.decision,
        admin_id=request.admin_id,
        username=request.username,
        password=request.password
    )

    if result["member_id"] is None:
        return MembershipDecisionResponse(message="Membership request rejected")

    credentials = result["credentials"]
    return MembershipDecisionResponse(
        message="Member approved. Share the credentials below with them.",
        member_id=result["member_id"],
        credentials=CredentialPair(username=credentials.username, password=credentials.password)
    )

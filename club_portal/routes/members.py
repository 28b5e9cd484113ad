"""Member routes"""

import logging

from fastapi import APIRouter, Depends

from club_portal.dependencies import get_membership_service
from club_portal.models import CredentialsUpdateRequest, CredentialsUpdateResponse
from club_portal.models.membership import CredentialPair
from club_portal.services.membership_service import MembershipService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.patch("/credentials", response_model=CredentialsUpdateResponse)
async def update_member_credentials(
    request: CredentialsUpdateRequest,
    members: MembershipService = Depends(get_membership_service)
):
    """Set a member's login; omitted fields are derived from their name"""
    credentials = members.update_credentials(
        request.member_id,
        username=request.username,
        password=request.password
    )
    return CredentialsUpdateResponse(
        message="Credentials updated successfully",
        credentials=CredentialPair(username=credentials.username, password=credentials.password)
    )

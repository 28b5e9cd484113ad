"""Authentication routes"""

import logging

from fastapi import APIRouter, Depends

from club_portal.auth.jwt import create_access_token, get_current_member
from club_portal.config import Settings
from club_portal.dependencies import get_app_settings, get_membership_service
from club_portal.models import LoginRequest, LoginResponse, MemberProfile
from club_portal.services.membership_service import MembershipService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    members: MembershipService = Depends(get_membership_service),
    settings: Settings = Depends(get_app_settings)
):
    """Log in with portal credentials; returns the profile and a bearer token"""
    member = members.login(
        request.username,
        request.password,
        reveal_reason=settings.reveal_login_failure_reason
    )

    profile = MemberProfile.from_document(member)
    access_token = create_access_token(
        data={"sub": member["id"], "username": member["username"]},
        settings=settings
    )

    return LoginResponse(
        message=f"Welcome back, {profile.name.split()[0]}!",
        user=profile,
        access_token=access_token
    )


@router.get("/me", response_model=MemberProfile)
async def get_me(current_member: dict = Depends(get_current_member)):
    """Profile of the member owning the bearer token"""
    return MemberProfile.from_document(current_member)

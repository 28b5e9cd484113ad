"""Project interest routes"""

import logging

from fastapi import APIRouter, Depends, Query

from club_portal.config import Settings
from club_portal.dependencies import get_app_settings, get_project_interest_service
from club_portal.models import (
    Acknowledgement,
    ProjectInterestCreate,
    ProjectInterestDecisionRequest,
    ProjectInterestDecisionResponse,
    ProjectInterestListResponse,
)
from club_portal.models.project import ProjectInterestResponse
from club_portal.services.project_interest_service import ProjectInterestService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=Acknowledgement, status_code=201)
async def register_project_interest(
    request: ProjectInterestCreate,
    interests: ProjectInterestService = Depends(get_project_interest_service)
):
    """Ask to join a project"""
    interest = interests.register_interest(request.project_id, request.user_id)
    return Acknowledgement(message="Project lead notified.", id=interest["id"])


@router.get("", response_model=ProjectInterestListResponse)
async def list_project_interests(
    status: str = Query("pending", description="pending, approved or held"),
    interests: ProjectInterestService = Depends(get_project_interest_service),
    settings: Settings = Depends(get_app_settings)
):
    """Project interests in one status, with project and member names"""
    results = interests.list_interests(status)
    return ProjectInterestListResponse(
        data=[ProjectInterestResponse.model_validate(i) for i in results],
        total=len(results),
        refresh_seconds=settings.admin_refresh_seconds
    )


@router.patch("", response_model=ProjectInterestDecisionResponse)
async def decide_project_interest(
    request: ProjectInterestDecisionRequest,
    interests: ProjectInterestService = Depends(get_project_interest_service)
):
    """Approve (adds the member to the project) or hold a project interest"""
    interest = interests.decide(
        interest_id=request.interest_id,
        status=request.status,
        project_id=request.project_id,
        user_id=request.user_id
    )
    message = "Project interest approved" if request.status == "approved" else "Project interest put on hold"
    return ProjectInterestDecisionResponse(
        message=message,
        interest=ProjectInterestResponse.model_validate(interest)
    )

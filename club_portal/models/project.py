"""Project and project interest models"""

from typing import List, Literal, Optional

from club_portal.models.base import RequestModel, RequiredStr, ResponseModel


class ProjectInterestCreate(RequestModel):
    project_id: RequiredStr
    user_id: RequiredStr


class ProjectInterestDecisionRequest(RequestModel):
    interest_id: RequiredStr
    status: Literal["approved", "held"]
    project_id: RequiredStr
    user_id: RequiredStr


class ProjectResponse(ResponseModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    tech: List[str] = []
    members: int = 0
    status: Optional[str] = None
    owner_id: Optional[str] = None


class ProjectInterestResponse(ResponseModel):
    id: str
    project_id: str
    user_id: str
    status: str
    created_at: str
    decided_at: Optional[str] = None
    project_name: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None


class ProjectInterestListResponse(ResponseModel):
    ok: bool = True
    data: List[ProjectInterestResponse]
    total: int
    refresh_seconds: int


class ProjectInterestDecisionResponse(ResponseModel):
    ok: bool = True
    message: str
    interest: ProjectInterestResponse

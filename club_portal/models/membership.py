"""Membership request models"""

from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator

from club_portal.models.base import RequestModel, RequiredStr, ResponseModel


class MembershipRequestCreate(RequestModel):
    """Join form submitted by an applicant"""
    name: RequiredStr
    email: EmailStr
    phone: RequiredStr
    interests: List[RequiredStr] = Field(min_length=1)
    experience: RequiredStr
    goals: RequiredStr
    role: RequiredStr
    availability: RequiredStr
    github: Optional[str] = None
    portfolio: Optional[str] = None

    @field_validator("interests")
    @classmethod
    def dedupe_interests(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class MembershipDecisionRequest(RequestModel):
    """Admin decision on a pending request.

    username/password override the derived credentials on approval.
    """
    request_id: RequiredStr
    decision: Literal["approved", "rejected"]
    admin_id: RequiredStr
    username: Optional[RequiredStr] = None
    password: Optional[RequiredStr] = None


class MembershipRequestResponse(ResponseModel):
    id: str
    name: str
    email: str
    phone: str
    github: Optional[str] = None
    portfolio: Optional[str] = None
    interests: List[str] = []
    experience: str
    goals: str
    role: str
    availability: str
    status: str
    created_at: str
    decided_by: Optional[str] = None
    decided_at: Optional[str] = None
    member_id: Optional[str] = None


class MembershipRequestListResponse(ResponseModel):
    ok: bool = True
    data: List[MembershipRequestResponse]
    total: int
    refresh_seconds: int


class CredentialPair(ResponseModel):
    username: str
    password: str


class MembershipDecisionResponse(ResponseModel):
    ok: bool = True
    message: str
    member_id: Optional[str] = None
    credentials: Optional[CredentialPair] = None

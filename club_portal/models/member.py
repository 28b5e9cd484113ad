"""Member, login and credential models"""

from typing import Optional

from club_portal.models.base import RequestModel, RequiredStr, ResponseModel
from club_portal.models.membership import CredentialPair


class LoginRequest(RequestModel):
    username: RequiredStr
    password: RequiredStr


class CredentialsUpdateRequest(RequestModel):
    """Omitted fields are derived from the member's name"""
    member_id: RequiredStr
    username: Optional[RequiredStr] = None
    password: Optional[RequiredStr] = None


class MemberProfile(ResponseModel):
    """Member as shown to the member; never includes the password"""
    id: str
    name: str
    email: str
    avatar: str = ""
    role: str = "student"
    badges: int = 0
    points: int = 0
    github: Optional[str] = None
    portfolio: Optional[str] = None

    @classmethod
    def from_document(cls, member: dict) -> "MemberProfile":
        return cls(
            id=member["id"],
            name=(member.get("name") or "").strip() or "Member",
            email=member.get("email") or "",
            avatar=member.get("avatar") or "",
            role=member.get("role") or "student",
            badges=member.get("badges") or 0,
            points=member.get("points") or 0,
            github=member.get("github"),
            portfolio=member.get("portfolio"),
        )


class LoginResponse(ResponseModel):
    ok: bool = True
    message: str
    user: MemberProfile
    access_token: str
    token_type: str = "bearer"


class CredentialsUpdateResponse(ResponseModel):
    ok: bool = True
    message: str
    credentials: CredentialPair

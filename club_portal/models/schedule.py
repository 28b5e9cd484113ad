"""Session, event and RSVP models"""

from typing import List, Optional

from club_portal.models.base import RequestModel, RequiredStr, ResponseModel


class RsvpCreate(RequestModel):
    event_id: RequiredStr
    user_id: RequiredStr


class SessionResponse(ResponseModel):
    id: str
    title: Optional[str] = None
    date: str
    time: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None


class EventResponse(ResponseModel):
    id: str
    title: Optional[str] = None
    date: str
    time: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None


class SessionListResponse(ResponseModel):
    ok: bool = True
    data: List[SessionResponse]
    total: int


class EventListResponse(ResponseModel):
    ok: bool = True
    data: List[EventResponse]
    total: int

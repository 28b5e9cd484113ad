"""Session, event and RSVP routes"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from club_portal.dependencies import get_dashboard_service, get_rsvp_service
from club_portal.models import Acknowledgement, EventListResponse, RsvpCreate, SessionListResponse
from club_portal.models.schedule import EventResponse, SessionResponse
from club_portal.services.dashboard_service import DashboardService
from club_portal.services.rsvp_service import RsvpService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/sessions", response_model=SessionListResponse)
async def list_upcoming_sessions(
    today: Optional[date] = Query(None, description="Caller's local date (YYYY-MM-DD)"),
    schedule: DashboardService = Depends(get_dashboard_service)
):
    """Sessions from today onwards, earliest first"""
    sessions = schedule.upcoming_sessions(today.isoformat() if today else None)
    return SessionListResponse(
        data=[SessionResponse.model_validate(s) for s in sessions],
        total=len(sessions)
    )


@router.get("/events", response_model=EventListResponse)
async def list_upcoming_events(
    today: Optional[date] = Query(None, description="Caller's local date (YYYY-MM-DD)"),
    schedule: DashboardService = Depends(get_dashboard_service)
):
    """Events from today onwards, earliest first"""
    events = schedule.upcoming_events(today.isoformat() if today else None)
    return EventListResponse(
        data=[EventResponse.model_validate(e) for e in events],
        total=len(events)
    )


@router.post("/event-rsvps", response_model=Acknowledgement, status_code=201)
async def rsvp_to_event(
    request: RsvpCreate,
    rsvps: RsvpService = Depends(get_rsvp_service)
):
    """RSVP to an event. Not deduplicated: each call adds a record."""
    record = rsvps.rsvp(request.event_id, request.user_id)
    return Acknowledgement(message="RSVP confirmed.", id=record["id"])

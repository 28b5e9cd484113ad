"""FastAPI dependencies resolving the per-app store, settings and services"""

from fastapi import Depends, Request

from club_portal.config import Settings
from club_portal.errors import StoreUnavailable
from club_portal.services.dashboard_service import DashboardService
from club_portal.services.document_store import DocumentStore
from club_portal.services.membership_service import MembershipService
from club_portal.services.project_interest_service import ProjectInterestService
from club_portal.services.rsvp_service import RsvpService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailable("Database is not initialized")
    return store


def get_membership_service(store: DocumentStore = Depends(get_store)) -> MembershipService:
    return MembershipService(store)


def get_project_interest_service(store: DocumentStore = Depends(get_store)) -> ProjectInterestService:
    return ProjectInterestService(store)


def get_rsvp_service(store: DocumentStore = Depends(get_store)) -> RsvpService:
    return RsvpService(store)


def get_dashboard_service(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
) -> DashboardService:
    return DashboardService(store, sessions_limit=settings.upcoming_sessions_limit)

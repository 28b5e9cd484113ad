"""Shared test fixtures for Club Portal API tests"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["TESTING"] = "true"
os.environ["DEBUG"] = "true"
os.environ["PORTAL_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_PATH"] = "/tmp/test_club_portal.json"

from club_portal.config import Settings
from club_portal.main import create_app
from club_portal.services import (
    DashboardService,
    DocumentStore,
    MembershipService,
    ProjectInterestService,
    RsvpService,
)
from club_portal.services.document_store import MEMBERS
from tests.factories import create_member, membership_application


# =============================================================================
# Settings and Store
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file"""
    return Settings(
        _env_file=None,
        debug=True,
        portal_secret_key="test-secret-key-for-testing-only",
        database_path="/tmp/test_club_portal.json",
    )


@pytest.fixture
def store() -> DocumentStore:
    """Fresh in-memory document store per test"""
    store = DocumentStore.in_memory()
    yield store
    store.close()


# =============================================================================
# Services
# =============================================================================

@pytest.fixture
def membership_service(store) -> MembershipService:
    return MembershipService(store)


@pytest.fixture
def interest_service(store) -> ProjectInterestService:
    return ProjectInterestService(store)


@pytest.fixture
def rsvp_service(store) -> RsvpService:
    return RsvpService(store)


@pytest.fixture
def dashboard_service(store, settings) -> DashboardService:
    return DashboardService(store, sessions_limit=settings.upcoming_sessions_limit)


# =============================================================================
# Application and Client Fixtures
# =============================================================================

@pytest.fixture
def app(settings, store):
    """FastAPI application wired to the in-memory store"""
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator:
    """Create async HTTP client for testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def pending_request(membership_service) -> dict:
    """A stored pending membership request for Ada Lovelace"""
    return membership_service.submit_request(
        {**membership_application(), "github": None, "portfolio": None}
    )


@pytest.fixture
def test_member(store) -> dict:
    """A stored member with credentials grace / grace123"""
    return store.insert(MEMBERS, create_member(name="Grace Hopper", username="grace", password="grace123"))

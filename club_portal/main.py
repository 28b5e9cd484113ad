"""Club Portal API - Main Application"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from club_portal import __version__
from club_portal.config import Settings, get_settings
from club_portal.errors import InvalidInput, PortalError
from club_portal.routes import auth, dashboard, join_requests, members, project_interests, schedule
from club_portal.services.document_store import DocumentStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid payload"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
    if first.get("type") == "missing":
        return f"Missing required field: {location}"
    if first.get("type") == "extra_forbidden":
        return f"Unexpected field: {location}"
    return f"Invalid value for {location}: {first.get('msg')}" if location else first.get("msg", "Invalid payload")


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Build the application.

    When ``store`` is given it is used as-is and left open on shutdown;
    otherwise the lifespan opens the TinyDB file from settings and closes it.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        # Startup
        logger.info(f"Starting {settings.app_name}...")
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = DocumentStore.open(settings.database_path)
        yield
        # Shutdown
        logger.info(f"Shutting down {settings.app_name}...")
        if owns_store:
            app.state.store.close()
            app.state.store = None

    app = FastAPI(
        title=settings.app_name,
        description="Membership intake, admin approvals, project interest, RSVPs and member dashboards",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        """Operation failures become structured results"""
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Schema violations are client errors"""
        error = InvalidInput(_describe_validation_error(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": "InternalError", "message": "Internal server error"}
        )

    # Include routers
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(join_requests.router, prefix="/join-requests", tags=["Membership Requests"])
    app.include_router(members.router, prefix="/members", tags=["Members"])
    app.include_router(project_interests.router, prefix="/project-interests", tags=["Project Interests"])
    app.include_router(schedule.router, tags=["Sessions & Events"])
    app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

    # Health check endpoints
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "club-portal-api",
            "version": __version__
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint"""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs"
        }

    return app


app = create_app()

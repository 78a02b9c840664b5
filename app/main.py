"""
Internship Placement Scheduler - Main Application

FastAPI backend for:
- Companies and their interview slots
- Students and their ranked company preferences
- Slot booking, greedy auto-assignment, offer tracking
- Bulk import of pre-parsed company/student/preference rows

Storage: SQL database when DATABASE_URL / POSTGRES_HOST is set, in-memory otherwise.

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.errors import (
    PlacementError, NotFoundError, InvalidInputError, InvariantViolationError, StorageError
)
from app.core.logging_config import configure_logging
from app.services.placement_system import PlacementSystem, build_store

logger = logging.getLogger(__name__)
settings = get_settings()


def _status_for(exc: PlacementError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, InvariantViolationError):
        return 409
    if isinstance(exc, InvalidInputError):
        return 422
    return 400


def create_app(system: PlacementSystem = None) -> FastAPI:
    """Build the app. Pass a ready PlacementSystem to skip store creation (tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        logger.info("Starting %s...", settings.app_name)
        if getattr(app.state, "placement_system", None) is None:
            app.state.placement_system = PlacementSystem(build_store(settings))
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Interview slot booking and preference matching for internship placements.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.placement_system = system

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PlacementError)
    async def placement_error_handler(request: Request, exc: PlacementError):
        return JSONResponse(
            status_code=_status_for(exc),
            content={"detail": exc.message, "error": type(exc).__name__},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=503,
            content={"detail": "Storage unavailable, no changes were applied", "error": "StorageError"},
        )

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check():
        current = app.state.placement_system
        return {
            "status": "healthy" if current is not None else "starting",
            "store": type(current.store).__name__ if current is not None else None,
        }

    return app


app = create_app()

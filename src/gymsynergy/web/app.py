"""FastAPI application for the GymSynergy REST API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from ..errors import GymSynergyError
from ..services.email_service import EmailService
from .deps import get_db
from .routers import (
    auth,
    clients,
    emails,
    forum,
    instructors,
    progress,
    sessions,
    subscriptions,
    users,
    videos,
    workouts,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    db_path = app.state.db_path or get_db_path()
    if not db_path.exists():
        await init_db(db_path)
    yield


def create_app(db_path: Path | None = None, email_service: EmailService | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="GymSynergy",
        description="Fitness coaching marketplace API",
        version=__version__,
        lifespan=lifespan,
    )

    # Routers read these from app state
    app.state.db_path = db_path
    app.state.email_service = email_service or EmailService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GymSynergyError)
    async def gymsynergy_error_handler(request: Request, exc: GymSynergyError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error for %s: %s", request.url.path, exc.errors())
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": f"{field}: {message}" if field else message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error for %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(exc) or "An unexpected error occurred."},
        )

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(videos.router)
    app.include_router(sessions.router)
    app.include_router(instructors.router)
    app.include_router(clients.router)
    app.include_router(progress.router)
    app.include_router(workouts.router)
    app.include_router(subscriptions.router)
    app.include_router(forum.router)
    app.include_router(emails.router)

    @app.api_route("/api/test", methods=["GET", "POST"])
    async def test_connection(request: Request):
        """Database connectivity check."""
        async with aiosqlite.connect(get_db(request)) as db:
            cursor = await db.execute("SELECT CURRENT_TIMESTAMP")
            row = await cursor.fetchone()
        return {"success": True, "timestamp": row[0]}

    return app


"""Classroom API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ClassroomError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Repository container built once on startup and kept on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Container on app.state instead of a module global: handlers receive it
      through the get_repositories dependency, tests swap it per test
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classroom.api.error_handlers import register_error_handlers
from classroom.api.routes import auth, comments, courses, health, users
from classroom.config import get_settings
from classroom.core.domain_types import StorageBackend
from classroom.infrastructure import database
from classroom.infrastructure.observability import log_requests, setup_logging
from classroom.infrastructure.repositories import build_repositories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.repositories = build_repositories(settings)
    if (
        settings.storage_backend == StorageBackend.DATABASE
        and settings.database_create_tables
        and database.db_manager is not None
    ):
        await database.db_manager.create_tables()
    logger.info(
        "Classroom API started",
        extra={"backend": settings.storage_backend.value},
    )
    yield
    logger.info("Classroom API shutting down")
    await database.close_db()


app = FastAPI(
    title="Classroom API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(courses.router)
app.include_router(comments.router)

register_error_handlers(app)

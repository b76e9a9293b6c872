"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database backend is unreachable
    - The memory backend is always ready once the container exists
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from classroom.api.dependencies import get_repositories
from classroom.core.domain_types import StorageBackend
from classroom.core.repository_protocols import RepositoryContainer
from classroom.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "classroom-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    repos: RepositoryContainer = Depends(get_repositories),
):
    """Readiness probe — includes storage connectivity."""
    if repos.backend == StorageBackend.MEMORY:
        return {"status": "ready", "checks": {"storage": "memory"}}
    db_ok = (
        await database.db_manager.health_check() if database.db_manager else False
    )
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"storage": "database", "database": "healthy"}}

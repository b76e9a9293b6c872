"""Repository Container Factory — builds the backend selected by settings.

Invariants:
    - Exactly one container per process: built in the lifespan (or lazily by
      the get_repositories dependency) and reused by every request
    - Backend choice is fixed for the container's lifetime
    - Comment repository always shares storage with its course repository

Design Decisions:
    - Factory returns the core RepositoryContainer: routes and services depend
      on protocols only, never on InMemory*/Sql* classes
"""

import logging

from classroom.config import Settings
from classroom.core.domain_types import StorageBackend
from classroom.core.repository_protocols import RepositoryContainer
from classroom.infrastructure import database
from classroom.infrastructure.database import DatabaseSessionManager
from classroom.infrastructure.repositories.database import (
    SqlCommentRepository, SqlCourseRepository, SqlUserRepository,
)
from classroom.infrastructure.repositories.memory import (
    InMemoryCommentRepository, InMemoryCourseRepository, InMemoryUserRepository,
)

logger = logging.getLogger(__name__)


def build_memory_repositories(
    seed_admin: tuple[str, str] | None = None, seed_courses: bool = True,
) -> RepositoryContainer:
    course_repo = InMemoryCourseRepository(seed=seed_courses)
    return RepositoryContainer(
        users=InMemoryUserRepository(seed_admin=seed_admin),
        courses=course_repo,
        comments=InMemoryCommentRepository(course_repo),
        backend=StorageBackend.MEMORY,
    )


def build_database_repositories(db: DatabaseSessionManager) -> RepositoryContainer:
    return RepositoryContainer(
        users=SqlUserRepository(db),
        courses=SqlCourseRepository(db),
        comments=SqlCommentRepository(db),
        backend=StorageBackend.DATABASE,
    )


def build_repositories(settings: Settings) -> RepositoryContainer:
    """Create the container for settings.storage_backend."""
    if settings.storage_backend == StorageBackend.DATABASE:
        db = database.db_manager or database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        container = build_database_repositories(db)
    else:
        container = build_memory_repositories(
            seed_admin=(settings.seed_admin_email, settings.seed_admin_password),
        )
    logger.info(
        "Repository container ready", extra={"backend": container.backend.value},
    )
    return container

"""Infrastructure fixtures — both repository backends behind one container fixture.

Invariants:
    - Every test gets a fresh container (no shared state between tests)
    - The database backend runs on in-memory SQLite with tables created up front
    - Neither backend is seeded: each test creates the courses it needs

Design Decisions:
    - Parametrized over backends: every contract test runs against memory and database
"""

import pytest

from classroom.infrastructure.database import DatabaseSessionManager
from classroom.infrastructure.repositories import (
    build_database_repositories, build_memory_repositories,
)


@pytest.fixture
async def sqlite_db():
    db = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture(params=["memory", "database"])
async def repos(request, sqlite_db):
    if request.param == "memory":
        yield build_memory_repositories(seed_courses=False)
    else:
        yield build_database_repositories(sqlite_db)


@pytest.fixture
async def course(repos):
    return await repos.courses.create({"title": "React Fundamentals"})

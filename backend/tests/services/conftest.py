"""Service test fixtures — in-memory repository container + FastAPI test client.

Invariants:
    - Every test gets a fresh container with the demo courses and one admin
    - app.state.repositories is swapped per test and restored afterwards
    - Tokens are issued directly (no login round-trip) for the seeded users

Design Decisions:
    - Memory backend for route tests: the repository contract tests already
      cover the database backend, routes only see the protocols
    - ASGITransport does not run the lifespan, so the container is set explicitly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from classroom.core.domain_types import Role
from classroom.infrastructure.repositories import build_memory_repositories
from classroom.infrastructure.security import create_access_token
from classroom.main import app

ADMIN_EMAIL = "admin@classroom.dev"
ADMIN_PASSWORD = "password123"
STUDENT_PASSWORD = "student123"


@pytest.fixture
def repos():
    return build_memory_repositories(seed_admin=(ADMIN_EMAIL, ADMIN_PASSWORD))


@pytest.fixture
async def client(repos):
    """FastAPI test client bound to the per-test repository container."""
    original = getattr(app.state, "repositories", None)
    app.state.repositories = repos

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.repositories = original


@pytest.fixture
async def admin(repos):
    return await repos.users.find_by_email(ADMIN_EMAIL)


@pytest.fixture
async def student(repos):
    return await repos.users.create("alice@classroom.dev", STUDENT_PASSWORD, Role.STUDENT)


@pytest.fixture
async def other_student(repos):
    return await repos.users.create("bob@classroom.dev", STUDENT_PASSWORD, Role.STUDENT)


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


@pytest.fixture
def student_headers(student):
    return auth_header(student)


@pytest.fixture
def other_headers(other_student):
    return auth_header(other_student)

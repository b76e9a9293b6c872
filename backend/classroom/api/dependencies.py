"""Route Dependencies — repository container, services and the authenticated user.

Invariants:
    - get_repositories returns the container stored on app.state; it is built
      at most once per app even if the lifespan did not run
    - get_current_user resolves the bearer token to a stored user or raises 401
    - require_admin raises 403 for authenticated non-admins
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from classroom.config import get_settings
from classroom.core.domain_types import Role
from classroom.core.entities import User
from classroom.core.errors import AuthenticationError, PermissionDeniedError
from classroom.core.repository_protocols import RepositoryContainer
from classroom.infrastructure.repositories import build_repositories
from classroom.services.comment_service import CommentService
from classroom.services.course_service import CourseService
from classroom.services.identity_service import IdentityService

bearer_scheme = HTTPBearer(auto_error=False)


def get_repositories(request: Request) -> RepositoryContainer:
    state = request.app.state
    repos = getattr(state, "repositories", None)
    if repos is None:
        repos = build_repositories(get_settings())
        state.repositories = repos
    return repos


def get_identity_service(
    repos: RepositoryContainer = Depends(get_repositories),
) -> IdentityService:
    return IdentityService(repos)


def get_course_service(
    repos: RepositoryContainer = Depends(get_repositories),
) -> CourseService:
    return CourseService(repos)


def get_comment_service(
    repos: RepositoryContainer = Depends(get_repositories),
) -> CommentService:
    return CommentService(repos)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityService = Depends(get_identity_service),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("No token provided")
    return await identity.resolve_token(credentials.credentials)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.ADMIN:
        raise PermissionDeniedError("Admin access required")
    return user

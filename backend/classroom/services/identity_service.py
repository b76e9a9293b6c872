"""Identity Service — signup, login, token resolution and admin user management.

Invariants:
    - Emails are unique across users (checked before create/update)
    - Login failures never reveal whether the email exists
    - Token subject must still resolve to a stored user
"""

import logging

from classroom.core.domain_types import Role
from classroom.core.entities import User
from classroom.core.errors import (
    AuthenticationError, DuplicateResourceError, ErrorContext, ResourceNotFoundError,
)
from classroom.core.repository_protocols import RepositoryContainer
from classroom.infrastructure.security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)


class IdentityService:
    """User-facing identity operations."""

    def __init__(self, repos: RepositoryContainer):
        self.repos = repos

    async def verify_credentials(self, email: str, password: str) -> User | None:
        return await self.repos.users.find_by_credentials(email, password)

    async def lookup_user_by_id(self, user_id: str) -> User | None:
        return await self.repos.users.find_by_id(user_id)

    async def signup(self, email: str, password: str) -> tuple[User, str]:
        user = await self.create_user(email, password, Role.STUDENT)
        return user, create_access_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self.verify_credentials(email, password)
        if user is None:
            logger.warning("Failed login attempt")
            raise AuthenticationError("Invalid email or password")
        logger.info("User logged in", extra={"user_id": user.id})
        return user, create_access_token(user)

    async def resolve_token(self, token: str) -> User:
        payload = decode_access_token(token)
        user = await self.lookup_user_by_id(payload["sub"])
        if user is None:
            raise AuthenticationError("User not found")
        return user

    async def list_users(self) -> list[User]:
        return await self.repos.users.find_all()

    async def get_user(self, user_id: str) -> User:
        user = await self.lookup_user_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id, ErrorContext(user_id=user_id))
        return user

    async def create_user(self, email: str, password: str, role: Role) -> User:
        if await self.repos.users.find_by_email(email) is not None:
            raise DuplicateResourceError("User", "email")
        user = await self.repos.users.create(email, password, role)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(
        self, user_id: str, email: str, password: str, role: Role | None = None,
    ) -> User:
        existing = await self.repos.users.find_by_email(email)
        if existing is not None and existing.id != user_id:
            raise DuplicateResourceError("User", "email")
        user = await self.repos.users.update(user_id, email, password, role)
        if user is None:
            raise ResourceNotFoundError("User", user_id, ErrorContext(user_id=user_id))
        return user

    async def delete_user(self, user_id: str) -> None:
        if not await self.repos.users.delete(user_id):
            raise ResourceNotFoundError("User", user_id, ErrorContext(user_id=user_id))
        logger.info("User deleted", extra={"user_id": user_id})

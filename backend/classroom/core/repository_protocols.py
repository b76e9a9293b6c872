"""Boundary Protocols — contracts between core and storage backends.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Every backend implements all three protocols with identical observable behavior
    - Not-found is an expected outcome: reported as None / False, never raised
    - Storage faults propagate as BackendFaultError, never swallowed

Design Decisions:
    - Protocol over ABC: structural subtyping, backends share no base class
    - Async in Protocol: backends may be remote, so every method is awaitable
      even when the in-memory backend never actually suspends
"""

from dataclasses import dataclass
from typing import Protocol

from classroom.core.domain_types import Role, StorageBackend
from classroom.core.entities import Comment, Course, User


class UserRepository(Protocol):
    """Identity store contract."""
    async def find_by_credentials(self, email: str, password: str) -> User | None: ...
    async def find_by_email(self, email: str) -> User | None: ...
    async def find_by_id(self, user_id: str) -> User | None: ...
    async def find_all(self) -> list[User]: ...
    async def create(
        self, email: str, password: str, role: Role = Role.STUDENT,
    ) -> User: ...
    async def update(
        self, user_id: str, email: str, password: str, role: Role | None = None,
    ) -> User | None: ...
    async def delete(self, user_id: str) -> bool: ...


class CourseRepository(Protocol):
    """Course store contract.

    course_data / fields use entity attribute names (title, video_url,
    resources as list[Resource], ...). ``id`` and ``comments`` are never
    accepted through create/update.
    """
    async def find_all(self) -> list[Course]: ...
    async def find_by_id(self, course_id: str) -> Course | None: ...
    async def create(self, course_data: dict) -> Course: ...
    async def update(self, course_id: str, fields: dict) -> Course | None: ...
    async def delete(self, course_id: str) -> bool: ...


class CommentRepository(Protocol):
    """Comment forest contract — content is already normalized by the caller."""
    async def add_comment(
        self, course_id: str, author_id: str, author_name: str, content: str,
    ) -> Comment | None: ...
    async def add_reply(
        self, course_id: str, parent_id: str,
        author_id: str, author_name: str, content: str,
    ) -> Comment | None: ...
    async def find_by_course_id(self, course_id: str) -> list[Comment] | None: ...
    async def update_comment(
        self, course_id: str, comment_id: str, content: str,
    ) -> Comment | None: ...
    async def delete_comment(self, course_id: str, comment_id: str) -> bool: ...


@dataclass
class RepositoryContainer:
    """One instance of each repository, shared for the process lifetime."""
    users: UserRepository
    courses: CourseRepository
    comments: CommentRepository
    backend: StorageBackend

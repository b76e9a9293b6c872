"""In-Memory Repositories — process-local lists behind the repository protocols.

Invariants:
    - State lives as long as the container instance (lost on restart)
    - Readers receive deep copies; only repository methods mutate stored entities
    - Comment forests are copied with comment_tree.clone_forest (no recursion)
    - Emails are unique; a taken email raises DuplicateResourceError
    - Each comment operation is locate-then-mutate with no await in between,
      so the event loop serializes concurrent requests against one course
    - Passwords are hashed exactly as in the database backend

Design Decisions:
    - Comment repository shares the course repository's live list rather than
      copying: the forest is embedded in the course, as in the database backend
"""

import copy
from dataclasses import replace
from uuid import uuid4

from classroom.core import comment_tree
from classroom.core.domain_types import Role
from classroom.core.entities import COURSE_EDITABLE_FIELDS, Comment, Course, User
from classroom.core.errors import DuplicateResourceError
from classroom.infrastructure.repositories.seed_data import DEMO_COURSES
from classroom.infrastructure.security import hash_password, verify_password


def _copy_course(course: Course) -> Course:
    return replace(
        course,
        resources=[replace(r) for r in course.resources],
        comments=comment_tree.clone_forest(course.comments),
    )


class InMemoryUserRepository:
    """User store backed by a list."""

    def __init__(self, seed_admin: tuple[str, str] | None = None):
        self._users: list[User] = []
        if seed_admin:
            email, password = seed_admin
            self._users.append(User(
                id=uuid4().hex, email=email,
                password_hash=hash_password(password), role=Role.ADMIN,
            ))

    def _get(self, user_id: str) -> User | None:
        return next((u for u in self._users if u.id == user_id), None)

    def _ensure_email_free(self, email: str, user_id: str | None = None) -> None:
        if any(u.email == email and u.id != user_id for u in self._users):
            raise DuplicateResourceError("User", "email")

    async def find_by_credentials(self, email: str, password: str) -> User | None:
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def find_by_email(self, email: str) -> User | None:
        user = next((u for u in self._users if u.email == email), None)
        return copy.deepcopy(user) if user else None

    async def find_by_id(self, user_id: str) -> User | None:
        user = self._get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_all(self) -> list[User]:
        return copy.deepcopy(self._users)

    async def create(
        self, email: str, password: str, role: Role = Role.STUDENT,
    ) -> User:
        self._ensure_email_free(email)
        user = User(
            id=uuid4().hex, email=email,
            password_hash=hash_password(password), role=role,
        )
        self._users.append(user)
        return copy.deepcopy(user)

    async def update(
        self, user_id: str, email: str, password: str, role: Role | None = None,
    ) -> User | None:
        user = self._get(user_id)
        if user is None:
            return None
        self._ensure_email_free(email, user_id)
        password_hash = hash_password(password)
        user.email = email
        user.password_hash = password_hash
        if role is not None:
            user.role = role
        return copy.deepcopy(user)

    async def delete(self, user_id: str) -> bool:
        before = len(self._users)
        self._users = [u for u in self._users if u.id != user_id]
        return len(self._users) < before


class InMemoryCourseRepository:
    """Course store backed by a list, optionally seeded with the demo catalogue."""

    def __init__(self, seed: bool = True):
        self._courses: list[Course] = []
        if seed:
            self._courses.extend(_copy_course(Course(**c)) for c in DEMO_COURSES)

    def get_live(self, course_id: str) -> Course | None:
        """Stored instance, for the comment repository only."""
        return next((c for c in self._courses if c.id == course_id), None)

    async def find_all(self) -> list[Course]:
        return [_copy_course(c) for c in self._courses]

    async def find_by_id(self, course_id: str) -> Course | None:
        course = self.get_live(course_id)
        return _copy_course(course) if course else None

    async def create(self, course_data: dict) -> Course:
        fields = {k: v for k, v in course_data.items() if k in COURSE_EDITABLE_FIELDS}
        course = Course(id=uuid4().hex, **copy.deepcopy(fields))
        self._courses.append(course)
        return _copy_course(course)

    async def update(self, course_id: str, fields: dict) -> Course | None:
        course = self.get_live(course_id)
        if course is None:
            return None
        for key, value in fields.items():
            if key in COURSE_EDITABLE_FIELDS:
                setattr(course, key, copy.deepcopy(value))
        return _copy_course(course)

    async def delete(self, course_id: str) -> bool:
        before = len(self._courses)
        self._courses = [c for c in self._courses if c.id != course_id]
        return len(self._courses) < before


class InMemoryCommentRepository:
    """Comment forests stored inside the course repository's live courses."""

    def __init__(self, course_repository: InMemoryCourseRepository):
        self._courses = course_repository

    async def add_comment(
        self, course_id: str, author_id: str, author_name: str, content: str,
    ) -> Comment | None:
        course = self._courses.get_live(course_id)
        if course is None:
            return None
        comment = comment_tree.new_comment(author_id, author_name, content)
        comment_tree.append_comment(course.comments, comment)
        return comment_tree.clone_comment(comment)

    async def add_reply(
        self, course_id: str, parent_id: str,
        author_id: str, author_name: str, content: str,
    ) -> Comment | None:
        course = self._courses.get_live(course_id)
        if course is None:
            return None
        reply = comment_tree.new_comment(author_id, author_name, content)
        if comment_tree.append_reply(course.comments, parent_id, reply) is None:
            return None
        return comment_tree.clone_comment(reply)

    async def find_by_course_id(self, course_id: str) -> list[Comment] | None:
        course = self._courses.get_live(course_id)
        return comment_tree.clone_forest(course.comments) if course else None

    async def update_comment(
        self, course_id: str, comment_id: str, content: str,
    ) -> Comment | None:
        course = self._courses.get_live(course_id)
        if course is None:
            return None
        updated = comment_tree.update_content(course.comments, comment_id, content)
        return comment_tree.clone_comment(updated) if updated else None

    async def delete_comment(self, course_id: str, comment_id: str) -> bool:
        course = self._courses.get_live(course_id)
        if course is None:
            return False
        return comment_tree.remove_comment(course.comments, comment_id) is not None

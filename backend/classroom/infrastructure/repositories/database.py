"""Database Repositories — SQLAlchemy async backend with embedded comment documents.

Invariants:
    - Each method opens its own session from the shared DatabaseSessionManager
    - A comment mutation reads the whole forest, mutates it with core.comment_tree,
      and writes the whole document back in one UPDATE
    - The UPDATE is conditional on the version read; a stale write raises
      ConcurrencyError and persists nothing
    - A failed lookup (course or comment absent) writes nothing
    - A unique-email violation on user create / update raises DuplicateResourceError

Design Decisions:
    - Rows mapped to core entities at the boundary: callers never see ORM objects
    - Column-level select for comment reads: the course row is not loaded into
      the identity map, so the conditional UPDATE has nothing to synchronize
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.core import comment_tree
from classroom.core.comment_snapshot import (
    forest_from_documents, forest_to_documents,
    resource_from_document, resource_to_document,
)
from classroom.core.domain_types import Role
from classroom.core.entities import COURSE_EDITABLE_FIELDS, Comment, Course, User
from classroom.core.errors import ConcurrencyError, DuplicateResourceError, ErrorContext
from classroom.infrastructure.database import DatabaseSessionManager
from classroom.infrastructure.security import hash_password, verify_password
from classroom.models.course import CourseRecord
from classroom.models.user import UserRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_user(record: UserRecord) -> User:
    return User(
        id=record.id,
        email=record.email,
        password_hash=record.password_hash,
        role=Role(record.role),
        created_at=record.created_at,
    )


def _to_course(record: CourseRecord) -> Course:
    return Course(
        id=record.id,
        title=record.title,
        description=record.description,
        thumbnail=record.thumbnail,
        video_url=record.video_url,
        video_title=record.video_title,
        content=record.content,
        resources=[resource_from_document(r) for r in record.resources or []],
        comments=forest_from_documents(record.comments),
    )


def _course_columns(fields: dict) -> dict:
    """Entity field values -> column values (resources serialized)."""
    columns = {k: v for k, v in fields.items() if k in COURSE_EDITABLE_FIELDS}
    if "resources" in columns:
        columns["resources"] = [resource_to_document(r) for r in columns["resources"]]
    return columns


async def _commit_unique_email(session: AsyncSession) -> None:
    """Commit a user write; a unique-email violation is a conflict, not a fault."""
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise DuplicateResourceError("User", "email")


class SqlUserRepository:
    """User store on the users table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def find_by_credentials(self, email: str, password: str) -> User | None:
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def find_by_email(self, email: str) -> User | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(UserRecord).where(UserRecord.email == email),
            )
            record = result.scalar_one_or_none()
            return _to_user(record) if record else None

    async def find_by_id(self, user_id: str) -> User | None:
        async with self._db.session() as session:
            record = await session.get(UserRecord, user_id)
            return _to_user(record) if record else None

    async def find_all(self) -> list[User]:
        async with self._db.session() as session:
            result = await session.execute(
                select(UserRecord).order_by(UserRecord.created_at),
            )
            return [_to_user(r) for r in result.scalars().all()]

    async def create(
        self, email: str, password: str, role: Role = Role.STUDENT,
    ) -> User:
        async with self._db.session() as session:
            record = UserRecord(
                email=email, password_hash=hash_password(password), role=role.value,
            )
            session.add(record)
            await _commit_unique_email(session)
            await session.refresh(record)
            return _to_user(record)

    async def update(
        self, user_id: str, email: str, password: str, role: Role | None = None,
    ) -> User | None:
        async with self._db.session() as session:
            record = await session.get(UserRecord, user_id)
            if record is None:
                return None
            record.email = email
            record.password_hash = hash_password(password)
            if role is not None:
                record.role = role.value
            await _commit_unique_email(session)
            return _to_user(record)

    async def delete(self, user_id: str) -> bool:
        async with self._db.session() as session:
            record = await session.get(UserRecord, user_id)
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
            return True


class SqlCourseRepository:
    """Course store on the courses table."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def find_all(self) -> list[Course]:
        async with self._db.session() as session:
            result = await session.execute(
                select(CourseRecord).order_by(CourseRecord.created_at),
            )
            return [_to_course(r) for r in result.scalars().all()]

    async def find_by_id(self, course_id: str) -> Course | None:
        async with self._db.session() as session:
            record = await session.get(CourseRecord, course_id)
            return _to_course(record) if record else None

    async def create(self, course_data: dict) -> Course:
        async with self._db.session() as session:
            record = CourseRecord(**_course_columns(course_data), comments=[])
            session.add(record)
            await session.commit()
            await session.refresh(record)
            return _to_course(record)

    async def update(self, course_id: str, fields: dict) -> Course | None:
        async with self._db.session() as session:
            record = await session.get(CourseRecord, course_id)
            if record is None:
                return None
            for key, value in _course_columns(fields).items():
                setattr(record, key, value)
            await session.commit()
            await session.refresh(record)
            return _to_course(record)

    async def delete(self, course_id: str) -> bool:
        async with self._db.session() as session:
            record = await session.get(CourseRecord, course_id)
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
            return True


class SqlCommentRepository:
    """Comment forests embedded in courses.comments, written with a version check."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def _mutate(
        self, course_id: str, mutation: Callable[[list[Comment]], T | None],
    ) -> T | None:
        """Read forest, apply mutation, write back if it produced a result."""
        async with self._db.session() as session:
            row = (await session.execute(
                select(CourseRecord.comments, CourseRecord.version)
                .where(CourseRecord.id == course_id),
            )).one_or_none()
            if row is None:
                return None
            forest = forest_from_documents(row.comments)
            result = mutation(forest)
            if result is None:
                return None

            written = await session.execute(
                update(CourseRecord)
                .where(CourseRecord.id == course_id)
                .where(CourseRecord.version == row.version)
                .values(comments=forest_to_documents(forest), version=row.version + 1)
                .execution_options(synchronize_session=False),
            )
            if written.rowcount != 1:
                await session.rollback()
                logger.warning(
                    "Stale comment write rejected",
                    extra={"course_id": course_id},
                )
                raise ConcurrencyError(
                    "Course comments were modified concurrently; reload and retry",
                    ErrorContext(course_id=course_id),
                )
            await session.commit()
            return result

    async def add_comment(
        self, course_id: str, author_id: str, author_name: str, content: str,
    ) -> Comment | None:
        comment = comment_tree.new_comment(author_id, author_name, content)
        return await self._mutate(
            course_id, lambda forest: comment_tree.append_comment(forest, comment),
        )

    async def add_reply(
        self, course_id: str, parent_id: str,
        author_id: str, author_name: str, content: str,
    ) -> Comment | None:
        reply = comment_tree.new_comment(author_id, author_name, content)
        return await self._mutate(
            course_id,
            lambda forest: comment_tree.append_reply(forest, parent_id, reply),
        )

    async def find_by_course_id(self, course_id: str) -> list[Comment] | None:
        async with self._db.session() as session:
            row = (await session.execute(
                select(CourseRecord.comments).where(CourseRecord.id == course_id),
            )).one_or_none()
            return forest_from_documents(row.comments) if row else None

    async def update_comment(
        self, course_id: str, comment_id: str, content: str,
    ) -> Comment | None:
        return await self._mutate(
            course_id,
            lambda forest: comment_tree.update_content(forest, comment_id, content),
        )

    async def delete_comment(self, course_id: str, comment_id: str) -> bool:
        removed = await self._mutate(
            course_id,
            lambda forest: comment_tree.remove_comment(forest, comment_id),
        )
        return removed is not None

"""Course Service — catalogue reads and admin course management."""

import logging

from classroom.core.entities import Course
from classroom.core.errors import ErrorContext, ResourceNotFoundError
from classroom.core.repository_protocols import RepositoryContainer

logger = logging.getLogger(__name__)


class CourseService:

    def __init__(self, repos: RepositoryContainer):
        self.repos = repos

    async def list_courses(self) -> list[Course]:
        return await self.repos.courses.find_all()

    async def get_course(self, course_id: str) -> Course:
        course = await self.repos.courses.find_by_id(course_id)
        if course is None:
            raise ResourceNotFoundError(
                "Course", course_id, ErrorContext(course_id=course_id),
            )
        return course

    async def create_course(self, course_data: dict) -> Course:
        course = await self.repos.courses.create(course_data)
        logger.info("Course created", extra={"course_id": course.id})
        return course

    async def update_course(self, course_id: str, fields: dict) -> Course:
        course = await self.repos.courses.update(course_id, fields)
        if course is None:
            raise ResourceNotFoundError(
                "Course", course_id, ErrorContext(course_id=course_id),
            )
        return course

    async def delete_course(self, course_id: str) -> None:
        if not await self.repos.courses.delete(course_id):
            raise ResourceNotFoundError(
                "Course", course_id, ErrorContext(course_id=course_id),
            )
        logger.info("Course deleted", extra={"course_id": course_id})

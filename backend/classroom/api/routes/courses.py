"""Course Routes — authenticated catalogue reads, admin-only writes."""

from fastapi import APIRouter, Depends, Response, status

from classroom.api.dependencies import (
    get_course_service, get_current_user, require_admin,
)
from classroom.schemas.course import (
    CourseCreate, CourseDetail, CourseSummary, CourseUpdate,
)
from classroom.services.course_service import CourseService

router = APIRouter(prefix="/api/v1/courses", tags=["courses"])


@router.get(
    "", response_model=list[CourseSummary],
    dependencies=[Depends(get_current_user)],
)
async def list_courses(courses: CourseService = Depends(get_course_service)):
    return [CourseSummary.from_entity(c) for c in await courses.list_courses()]


@router.get(
    "/{course_id}", response_model=CourseDetail,
    dependencies=[Depends(get_current_user)],
)
async def get_course(
    course_id: str, courses: CourseService = Depends(get_course_service),
):
    """Course with its full comment forest."""
    return CourseDetail.from_entity(await courses.get_course(course_id))


@router.post(
    "", response_model=CourseDetail, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_course(
    body: CourseCreate, courses: CourseService = Depends(get_course_service),
):
    return CourseDetail.from_entity(await courses.create_course(body.to_fields()))


@router.put(
    "/{course_id}", response_model=CourseDetail,
    dependencies=[Depends(require_admin)],
)
async def update_course(
    course_id: str,
    body: CourseUpdate,
    courses: CourseService = Depends(get_course_service),
):
    course = await courses.update_course(course_id, body.to_fields())
    return CourseDetail.from_entity(course)


@router.delete(
    "/{course_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_course(
    course_id: str, courses: CourseService = Depends(get_course_service),
):
    await courses.delete_course(course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

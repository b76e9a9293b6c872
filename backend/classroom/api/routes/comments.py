"""Comment Routes — threaded comments on a course.

Invariants:
    - Any authenticated user may comment or reply; the author snapshot is the caller
    - Only the author or an admin may edit or delete (403 otherwise)
    - Create/reply answer 201 with the new node; unknown course/parent answer 404
    - Empty or whitespace-only content answers 400 before any storage call
"""

from fastapi import APIRouter, Depends, Response, status

from classroom.api.dependencies import get_comment_service, get_current_user
from classroom.core.entities import User
from classroom.core.errors import ErrorContext, ResourceNotFoundError
from classroom.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from classroom.services.comment_service import CommentService

router = APIRouter(prefix="/api/v1/courses/{course_id}/comments", tags=["comments"])


@router.get(
    "", response_model=list[CommentResponse],
    dependencies=[Depends(get_current_user)],
)
async def list_comments(
    course_id: str, comments: CommentService = Depends(get_comment_service),
):
    """Full comment forest of a course."""
    forest = await comments.list_comments(course_id)
    return [CommentResponse.from_entity(c) for c in forest]


@router.post(
    "", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    course_id: str,
    body: CommentCreate,
    user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    comment = await comments.add_comment(
        course_id, user.id, user.display_name, body.content,
    )
    return CommentResponse.from_entity(comment)


@router.post(
    "/{comment_id}/replies", response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    course_id: str,
    comment_id: str,
    body: CommentCreate,
    user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    reply = await comments.add_reply(
        course_id, comment_id, user.id, user.display_name, body.content,
    )
    return CommentResponse.from_entity(reply)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    course_id: str,
    comment_id: str,
    body: CommentUpdate,
    user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    await comments.ensure_can_modify(course_id, comment_id, user)
    updated = await comments.update_comment(course_id, comment_id, body.content)
    return CommentResponse.from_entity(updated)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    course_id: str,
    comment_id: str,
    user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    """Delete a comment together with all of its replies."""
    await comments.ensure_can_modify(course_id, comment_id, user)
    if not await comments.delete_comment(course_id, comment_id):
        raise ResourceNotFoundError(
            "Comment", comment_id,
            ErrorContext(course_id=course_id, comment_id=comment_id),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

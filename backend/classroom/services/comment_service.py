"""Comment Service — add / reply / update / delete / list over a course's comment forest.

Invariants:
    - Content is normalized (stripped, non-empty) before any repository call
    - A reply nested deeper than MAX_REPLY_DEPTH is rejected before any write
    - Unknown course or comment raises ResourceNotFoundError; nothing is persisted
    - delete_comment on an already-removed comment returns False (not an error)
    - Only the author or an admin may edit or delete a comment

Design Decisions:
    - author_id / author_name are passed in as a snapshot; the service never
      re-resolves the author later, so renamed users keep their old byline
"""

import logging

from classroom.core import comment_tree
from classroom.core.domain_types import Role
from classroom.core.entities import Comment, User
from classroom.core.errors import (
    ErrorContext, PermissionDeniedError, ResourceNotFoundError,
)
from classroom.core.repository_protocols import RepositoryContainer

logger = logging.getLogger(__name__)


def _course_not_found(course_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Course", course_id, ErrorContext(course_id=course_id),
    )


def _comment_not_found(course_id: str, comment_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Comment", comment_id,
        ErrorContext(course_id=course_id, comment_id=comment_id),
    )


class CommentService:
    """Comment-tree operations for the HTTP layer."""

    def __init__(self, repos: RepositoryContainer):
        self.repos = repos

    async def _ensure_course(self, course_id: str) -> None:
        if await self.repos.courses.find_by_id(course_id) is None:
            raise _course_not_found(course_id)

    async def add_comment(
        self, course_id: str, author_id: str, author_name: str, content: str,
    ) -> Comment:
        """Append a new root comment to the course's forest."""
        text = comment_tree.normalize_content(content)
        comment = await self.repos.comments.add_comment(
            course_id, author_id, author_name, text,
        )
        if comment is None:
            logger.warning("Comment on unknown course", extra={"course_id": course_id})
            raise _course_not_found(course_id)
        logger.info(
            "Comment added",
            extra={"course_id": course_id, "comment_id": comment.id, "user_id": author_id},
        )
        return comment

    async def add_reply(
        self, course_id: str, parent_id: str,
        author_id: str, author_name: str, content: str,
    ) -> Comment:
        """Append a reply as the last child of parent_id, up to MAX_REPLY_DEPTH levels."""
        text = comment_tree.normalize_content(content)
        comment_tree.check_reply_depth(await self.list_comments(course_id), parent_id)
        reply = await self.repos.comments.add_reply(
            course_id, parent_id, author_id, author_name, text,
        )
        if reply is None:
            await self._ensure_course(course_id)
            logger.warning(
                "Reply to unknown comment",
                extra={"course_id": course_id, "parent_id": parent_id},
            )
            raise _comment_not_found(course_id, parent_id)
        logger.info(
            "Reply added",
            extra={
                "course_id": course_id, "comment_id": reply.id,
                "parent_id": parent_id, "user_id": author_id,
            },
        )
        return reply

    async def update_comment(
        self, course_id: str, comment_id: str, content: str,
    ) -> Comment:
        """Replace content only; id, created_at and replies are untouched."""
        text = comment_tree.normalize_content(content)
        updated = await self.repos.comments.update_comment(course_id, comment_id, text)
        if updated is None:
            await self._ensure_course(course_id)
            raise _comment_not_found(course_id, comment_id)
        logger.info(
            "Comment updated",
            extra={"course_id": course_id, "comment_id": comment_id},
        )
        return updated

    async def delete_comment(self, course_id: str, comment_id: str) -> bool:
        """Remove the comment and its whole reply subtree.

        Returns False when the comment no longer exists; raises only when the
        course itself is unknown.
        """
        deleted = await self.repos.comments.delete_comment(course_id, comment_id)
        if not deleted:
            await self._ensure_course(course_id)
            logger.warning(
                "Delete of unknown comment",
                extra={"course_id": course_id, "comment_id": comment_id},
            )
            return False
        logger.info(
            "Comment deleted",
            extra={"course_id": course_id, "comment_id": comment_id},
        )
        return True

    async def list_comments(self, course_id: str) -> list[Comment]:
        forest = await self.repos.comments.find_by_course_id(course_id)
        if forest is None:
            raise _course_not_found(course_id)
        return forest

    async def get_comment(self, course_id: str, comment_id: str) -> Comment:
        forest = await self.list_comments(course_id)
        comment = comment_tree.find_comment(forest, comment_id)
        if comment is None:
            raise _comment_not_found(course_id, comment_id)
        return comment

    async def ensure_can_modify(
        self, course_id: str, comment_id: str, actor: User,
    ) -> Comment:
        """Return the comment if actor is its author or an admin."""
        comment = await self.get_comment(course_id, comment_id)
        if actor.role != Role.ADMIN and comment.author_id != actor.id:
            raise PermissionDeniedError(
                "Not authorized to modify this comment",
                ErrorContext(course_id=course_id, comment_id=comment_id, user_id=actor.id),
            )
        return comment

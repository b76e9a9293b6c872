"""Comment Schemas — request validation and the recursive comment response.

Invariants:
    - content is stripped; empty or whitespace-only content is rejected (400)
    - CommentResponse mirrors the stored document: {id, authorId, authorName, content, createdAt, replies}
    - from_entity recurses once per level; threads are at most MAX_REPLY_DEPTH deep
"""

from datetime import datetime

from pydantic import Field, field_validator

from classroom.core.domain_types import MAX_COMMENT_LENGTH
from classroom.core.entities import Comment
from classroom.schemas.base import CamelModel


class CommentCreate(CamelModel):
    """New comment or reply body."""
    content: str = Field(max_length=MAX_COMMENT_LENGTH)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v


class CommentUpdate(CommentCreate):
    """Replacement content for an existing comment."""


class CommentResponse(CamelModel):
    id: str
    author_id: str
    author_name: str
    content: str
    created_at: datetime
    replies: list["CommentResponse"] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            author_id=comment.author_id,
            author_name=comment.author_name,
            content=comment.content,
            created_at=comment.created_at,
            replies=[cls.from_entity(r) for r in comment.replies],
        )

"""Course ORM — the course document, with its comment forest embedded.

Invariants:
    - comments holds the full forest as nested JSON: [{id, authorId, authorName, content, createdAt, replies}]
    - Comment ids live inside the document, independent of the row primary key
    - version increments on every comment write (optimistic concurrency)
    - created_at orders the catalogue (insertion order, as in the memory backend)

Design Decisions:
    - JSON column for comments and resources: the whole forest is read and
      written back as one document, no per-comment rows
    - version compared in the UPDATE's WHERE clause: a stale writer matches no
      row instead of silently overwriting a concurrent change
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from classroom.db.base import Base


class CourseRecord(Base):
    """Course row — aggregate root for its comment forest."""
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thumbnail: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    video_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    video_title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    resources: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

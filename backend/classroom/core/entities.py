"""Domain Entities — pure dataclasses shared by every repository backend.

Invariants:
    - Comment.replies is an owned list (tree of values, never a pointer graph)
    - Course owns exactly one comment forest (Course.comments)
    - User.password_hash never leaves the repository / service layer

Design Decisions:
    - Plain dataclasses, not ORM rows: the same entity flows out of the in-memory
      and the database backend, so callers never branch on backend type
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from classroom.core.domain_types import Role, ResourceType


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Comment:
    """A node in a course's comment forest."""
    id: str
    author_id: str
    author_name: str
    content: str
    created_at: datetime = field(default_factory=utc_now)
    replies: list["Comment"] = field(default_factory=list)


@dataclass
class Resource:
    """Downloadable material attached to a course."""
    name: str
    type: ResourceType
    url: str


@dataclass
class Course:
    """Course record with its embedded comment forest."""
    id: str
    title: str
    description: str = ""
    thumbnail: str = ""
    video_url: str = ""
    video_title: str = ""
    content: str = ""
    resources: list[Resource] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)


# Fields accepted by CourseRepository.create/update (id and comments are not)
COURSE_EDITABLE_FIELDS: tuple[str, ...] = (
    "title", "description", "thumbnail", "video_url",
    "video_title", "content", "resources",
)


@dataclass
class User:
    """Identity record. Display name for comment snapshots is the email."""
    id: str
    email: str
    password_hash: str
    role: Role = Role.STUDENT
    created_at: datetime = field(default_factory=utc_now)

    @property
    def display_name(self) -> str:
        return self.email

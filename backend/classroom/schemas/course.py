"""Course Schemas — catalogue responses and admin create/update bodies.

Invariants:
    - CourseUpdate only carries fields the client actually sent (exclude_unset)
    - Course lists omit the comment forest; details include it
"""

from pydantic import Field

from classroom.core import comment_tree
from classroom.core.domain_types import ResourceType
from classroom.core.entities import Course, Resource
from classroom.schemas.base import CamelModel
from classroom.schemas.comment import CommentResponse


class ResourceSchema(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    type: ResourceType
    url: str = Field(min_length=1, max_length=500)

    def to_entity(self) -> Resource:
        return Resource(name=self.name, type=self.type, url=self.url)


class CourseCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    thumbnail: str = ""
    video_url: str = ""
    video_title: str = ""
    content: str = ""
    resources: list[ResourceSchema] = Field(default_factory=list)

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude={"resources"})
        fields["resources"] = [r.to_entity() for r in self.resources]
        return fields


class CourseUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    video_title: str | None = None
    content: str | None = None
    resources: list[ResourceSchema] | None = None

    def to_fields(self) -> dict:
        fields = self.model_dump(exclude_unset=True, exclude={"resources"})
        fields = {k: v for k, v in fields.items() if v is not None}
        if self.resources is not None:
            fields["resources"] = [r.to_entity() for r in self.resources]
        return fields


class CourseSummary(CamelModel):
    id: str
    title: str
    description: str
    thumbnail: str
    video_url: str
    video_title: str
    content: str
    resources: list[ResourceSchema]
    comment_count: int

    @classmethod
    def from_entity(cls, course: Course) -> "CourseSummary":
        return cls(
            **_course_fields(course),
            comment_count=comment_tree.count_comments(course.comments),
        )


class CourseDetail(CamelModel):
    id: str
    title: str
    description: str
    thumbnail: str
    video_url: str
    video_title: str
    content: str
    resources: list[ResourceSchema]
    comments: list[CommentResponse]

    @classmethod
    def from_entity(cls, course: Course) -> "CourseDetail":
        return cls(
            **_course_fields(course),
            comments=[CommentResponse.from_entity(c) for c in course.comments],
        )


def _course_fields(course: Course) -> dict:
    return {
        "id": course.id,
        "title": course.title,
        "description": course.description,
        "thumbnail": course.thumbnail,
        "video_url": course.video_url,
        "video_title": course.video_title,
        "content": course.content,
        "resources": [
            ResourceSchema(name=r.name, type=r.type, url=r.url)
            for r in course.resources
        ],
    }

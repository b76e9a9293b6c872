"""Comment Service — NotFound / validation / permission semantics over the repositories.

Invariants:
    - Unknown course raises ResourceNotFoundError and persists nothing
    - Whitespace-only content is rejected before any repository call
    - delete_comment is False for an already-removed comment, raises for an unknown course
    - Only the author or an admin may modify a comment
    - A reply deeper than MAX_REPLY_DEPTH is rejected and persists nothing
"""

import pytest

from classroom.core import comment_tree
from classroom.core.domain_types import MAX_REPLY_DEPTH, Role, StorageBackend
from classroom.core.entities import User
from classroom.core.errors import (
    PermissionDeniedError, ResourceNotFoundError, ValidationFailedError,
)
from classroom.core.repository_protocols import RepositoryContainer
from classroom.services.comment_service import CommentService


class _ExplodingComments:
    """Comment repository that fails the test if it is ever reached."""

    def __getattr__(self, name):
        raise AssertionError(f"comment repository reached: {name}")


@pytest.fixture
def service(repos):
    return CommentService(repos)


async def test_reply_chain_scenario(service):
    a = await service.add_comment("1", "u1", "alice", "question")
    r1 = await service.add_reply("1", a.id, "u2", "bob", "nice")
    r2 = await service.add_reply("1", r1.id, "u3", "carol", "agreed")

    forest = await service.list_comments("1")
    assert [r.id for r in forest[0].replies] == [r1.id]
    assert [r.id for r in forest[0].replies[0].replies] == [r2.id]

    assert await service.delete_comment("1", r1.id) is True
    forest = await service.list_comments("1")
    assert forest[0].replies == []


async def test_add_comment_unknown_course(service, repos):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.add_comment("missing-course", "u1", "alice", "hi")
    assert exc.value.resource_type == "Course"
    for course in await repos.courses.find_all():
        assert course.comments == []


async def test_whitespace_content_rejected_before_storage(repos):
    guarded = RepositoryContainer(
        users=repos.users, courses=repos.courses,
        comments=_ExplodingComments(), backend=StorageBackend.MEMORY,
    )
    service = CommentService(guarded)
    with pytest.raises(ValidationFailedError):
        await service.add_comment("1", "u1", "alice", "   ")
    with pytest.raises(ValidationFailedError):
        await service.add_reply("1", "a", "u1", "alice", "\n")
    with pytest.raises(ValidationFailedError):
        await service.update_comment("1", "a", "")


async def test_content_is_stored_stripped(service):
    comment = await service.add_comment("1", "u1", "alice", "  hello  ")
    assert comment.content == "hello"


async def test_reply_to_unknown_parent_names_comment(service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.add_reply("1", "nope", "u1", "alice", "hi")
    assert exc.value.resource_type == "Comment"


async def test_reply_to_unknown_course_names_course(service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.add_reply("missing-course", "nope", "u1", "alice", "hi")
    assert exc.value.resource_type == "Course"


async def test_update_unknown_comment(service):
    with pytest.raises(ResourceNotFoundError) as exc:
        await service.update_comment("1", "nope", "hi")
    assert exc.value.resource_type == "Comment"


async def test_delete_twice(service):
    a = await service.add_comment("1", "u1", "alice", "hi")
    assert await service.delete_comment("1", a.id) is True
    assert await service.delete_comment("1", a.id) is False


async def test_delete_on_unknown_course_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete_comment("missing-course", "a")


async def test_list_unknown_course_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.list_comments("missing-course")


async def test_ensure_can_modify(service):
    author = User(id="u1", email="alice@classroom.dev", password_hash="")
    stranger = User(id="u2", email="bob@classroom.dev", password_hash="")
    admin = User(id="u3", email="admin@classroom.dev", password_hash="", role=Role.ADMIN)
    a = await service.add_comment("1", author.id, author.display_name, "hi")

    assert (await service.ensure_can_modify("1", a.id, author)).id == a.id
    assert (await service.ensure_can_modify("1", a.id, admin)).id == a.id
    with pytest.raises(PermissionDeniedError):
        await service.ensure_can_modify("1", a.id, stranger)


async def test_reply_depth_limit(service):
    parent = await service.add_comment("1", "u1", "alice", "level 0")
    for level in range(1, MAX_REPLY_DEPTH + 1):
        parent = await service.add_reply("1", parent.id, "u1", "alice", f"level {level}")

    with pytest.raises(ValidationFailedError) as exc:
        await service.add_reply("1", parent.id, "u1", "alice", "too deep")
    assert exc.value.field == "parent_id"

    forest = await service.list_comments("1")
    assert comment_tree.count_comments(forest) == MAX_REPLY_DEPTH + 1
    assert comment_tree.comment_depth(forest, parent.id) == MAX_REPLY_DEPTH

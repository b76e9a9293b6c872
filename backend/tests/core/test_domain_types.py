"""Domain Types — verifies identity wrappers, enum values and limits.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
    - Limits match bcrypt and signup rules
"""

import json

from classroom.core.domain_types import (
    UserId, CourseId, CommentId,
    Role, ResourceType, StorageBackend,
    MIN_PASSWORD_LENGTH, MAX_PASSWORD_BYTES, MAX_COMMENT_LENGTH,
)


def test_identity_types_wrap_str():
    assert UserId("u1") == "u1"
    assert CourseId("c1") == "c1"
    assert CommentId("a") == "a"


def test_role_has_student_and_admin():
    assert set(Role) == {Role.STUDENT, Role.ADMIN}
    assert Role("admin") is Role.ADMIN


def test_resource_types():
    assert {t.value for t in ResourceType} == {"pdf", "zip", "code"}


def test_storage_backends():
    assert {b.value for b in StorageBackend} == {"memory", "database"}


def test_enums_serialize_as_plain_strings():
    assert json.dumps({"role": Role.STUDENT}) == '{"role": "student"}'


def test_limits():
    assert MIN_PASSWORD_LENGTH == 6
    assert MAX_PASSWORD_BYTES == 72
    assert MAX_COMMENT_LENGTH > 0

"""Create Admin Script — argument validation and idempotent account creation.

Design Decisions:
    - Runs against the memory backend from the test environment; the seeded
      admin makes the "already exists" branch observable without a database
"""

import logging

import pytest

from classroom.core.domain_types import Role
from classroom.infrastructure import observability
from classroom.scripts.create_admin import create_admin, main, parse_args


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    if observability._handler is not None:
        logging.root.removeHandler(observability._handler)
        observability._handler = None


def test_defaults_come_from_settings():
    args = parse_args([])
    assert args.email == "admin@classroom.dev"
    assert args.role == "admin"


async def test_existing_email_is_skipped():
    assert await create_admin("admin@classroom.dev", "password123", Role.ADMIN) is False


async def test_new_email_is_created():
    assert await create_admin("ops@classroom.dev", "secret123", Role.ADMIN) is True


def test_short_password_exits_1():
    assert main(["--email", "ops@classroom.dev", "--password", "123"]) == 1


def test_blank_email_exits_1():
    assert main(["--email", "   ", "--password", "secret123"]) == 1


def test_valid_arguments_exit_0():
    assert main(["--email", "Ops@Classroom.dev", "--password", "secret123", "--role", "student"]) == 0


def test_unknown_role_rejected_by_argparse():
    with pytest.raises(SystemExit):
        parse_args(["--role", "superuser"])

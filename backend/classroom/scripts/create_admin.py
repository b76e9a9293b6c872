"""Create Admin — bootstrap a user account through the configured storage backend.

Usage:
    python -m classroom.scripts.create_admin --email admin@classroom.dev --password secret123

Exit codes: 0 created or already present, 1 invalid input or storage failure.

Only meaningful with storage_backend=database; the memory backend seeds its own admin
and forgets everything when the process exits.
"""

import argparse
import asyncio
import logging
import sys

from classroom.config import get_settings
from classroom.core.domain_types import MIN_PASSWORD_LENGTH, Role, StorageBackend
from classroom.core.errors import ClassroomError
from classroom.infrastructure import database
from classroom.infrastructure.observability import setup_logging
from classroom.infrastructure.repositories import build_repositories

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create a Classroom user account.")
    parser.add_argument("--email", default=settings.seed_admin_email)
    parser.add_argument("--password", default=settings.seed_admin_password)
    parser.add_argument(
        "--role", choices=[r.value for r in Role], default=Role.ADMIN.value,
    )
    return parser.parse_args(argv)


async def create_admin(email: str, password: str, role: Role) -> bool:
    """Create the user unless the email is taken. Returns True if created."""
    settings = get_settings()
    repos = build_repositories(settings)
    try:
        if settings.database_create_tables and database.db_manager is not None:
            await database.db_manager.create_tables()
        if await repos.users.find_by_email(email) is not None:
            logger.info(f"User already exists: {email}")
            return False
        user = await repos.users.create(email, password, role)
        logger.info(f"User created: {user.id} ({email}, role={role.value})")
        return True
    finally:
        await database.close_db()


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    args = parse_args(argv)
    email = args.email.strip().lower()
    if not email or len(args.password) < MIN_PASSWORD_LENGTH:
        logger.error(
            f"Email is required and password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
        return 1
    if settings.storage_backend == StorageBackend.MEMORY:
        logger.warning("storage_backend=memory: the account will not outlive this process")
    try:
        asyncio.run(create_admin(email, args.password, Role(args.role)))
    except ClassroomError as e:
        logger.error(f"Failed to create user: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

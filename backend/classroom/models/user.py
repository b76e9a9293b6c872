"""User ORM — persists identity records.

Invariants:
    - id is an opaque string primary key (uuid4 hex)
    - email is unique
    - password_hash is a bcrypt hash, never plaintext
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from classroom.db.base import Base


class UserRecord(Base):
    """User row."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="student",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

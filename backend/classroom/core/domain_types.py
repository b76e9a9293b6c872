"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CourseId, CommentId wrap opaque strings — never parsed or compared by order
    - All valid roles / resource kinds / backends encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
CourseId = NewType("CourseId", str)
CommentId = NewType("CommentId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles — admin unlocks user and course management."""
    STUDENT = "student"
    ADMIN = "admin"


class ResourceType(str, Enum):
    """Downloadable course material kinds."""
    PDF = "pdf"
    ZIP = "zip"
    CODE = "code"


class StorageBackend(str, Enum):
    """Repository backends selectable via settings.storage_backend."""
    MEMORY = "memory"
    DATABASE = "database"


# ─── Limits ──────────────────────────────────────────────────────

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72   # bcrypt truncates beyond this
MAX_COMMENT_LENGTH = 10_000
MAX_REPLY_DEPTH = 100     # roots are depth 0; deeper replies are rejected

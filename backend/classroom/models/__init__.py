"""ORM Models — SQLAlchemy declarative models for the database backend.

Invariants:
    - All models inherit from Base (db/base.py)
    - Course rows embed their comment forest as a JSON document (no comments table)

Design Decisions:
    - One file per table
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from classroom.models.user import UserRecord  # noqa: F401
from classroom.models.course import CourseRecord  # noqa: F401

"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (owned by DatabaseSessionManager)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests and local development
"""

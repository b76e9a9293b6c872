"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to BackendFaultError (core/errors.py)

Design Decisions:
    - One manager per process, owned by the repository container and disposed
      in the FastAPI lifespan
    - expire_on_commit=False: prevents lazy-load issues in async context
    - SQLite URLs skip pool sizing (aiosqlite memory databases use a static pool)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from classroom.core.errors import BackendFaultError
from classroom.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAULTS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_backend_fault(exc: SQLAlchemyError) -> BackendFaultError:
    """Map a SQLAlchemy exception to the domain's 500-level error."""
    return next(
        BackendFaultError(message, operation)
        for kind, message, operation in _FAULTS
        if isinstance(exc, kind)
    )


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        options: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scope; driver errors roll back and surface as BackendFaultError."""
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                fault = to_backend_fault(e)
                logger.error(f"{fault.message} ({type(e).__name__}: {e})")
                raise fault from e

    async def create_tables(self) -> None:
        """Create all tables (dev / tests). Production uses Alembic migrations."""
        import classroom.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup when storage_backend=database)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None

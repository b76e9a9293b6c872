"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use, so the environment must be set before any import
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

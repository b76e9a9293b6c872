"""Security Primitives — bcrypt password hashing and JWT access tokens.

Invariants:
    - Passwords are only ever stored as bcrypt hashes (both storage backends)
    - Passwords over 72 bytes are rejected, not silently truncated
    - Tokens carry sub (user id), email, role, exp; anything else is ignored
    - Any decode failure (signature, expiry, shape) surfaces as AuthenticationError
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from classroom.config import get_settings
from classroom.core.domain_types import MAX_PASSWORD_BYTES
from classroom.core.entities import User
from classroom.core.errors import AuthenticationError, ValidationFailedError


@lru_cache
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def _check_bcrypt_len(password: str):
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailedError(
            f"Password too long (bcrypt max {MAX_PASSWORD_BYTES} bytes)",
            field="password",
        )


def hash_password(password: str) -> str:
    _check_bcrypt_len(password)
    return _pwd_context(get_settings().password_hash_rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return _pwd_context(get_settings().password_hash_rounds).verify(
        plain_password, hashed_password,
    )


def create_access_token(user: User, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.jwt_expiration_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; return the claims."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise AuthenticationError("Invalid authentication token")
    if not payload.get("sub"):
        raise AuthenticationError("Invalid authentication token")
    return payload

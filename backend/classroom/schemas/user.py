"""User & Auth Schemas — credentials, admin user management and token responses.

Invariants:
    - Passwords are at least 6 characters on signup / create / update
    - Emails are stripped and lowercased before validation
    - UserResponse never carries the password hash
"""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from classroom.core.domain_types import MIN_PASSWORD_LENGTH, Role
from classroom.core.entities import User
from classroom.schemas.base import CamelModel


class _Credentials(CamelModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class SignupRequest(_Credentials):
    """Self-service student signup."""


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(_Credentials):
    role: Role = Role.STUDENT


class UserUpdate(_Credentials):
    role: Role | None = None


class UserResponse(CamelModel):
    id: str
    email: str
    role: Role
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id, email=user.email, role=user.role, created_at=user.created_at,
        )


class AuthResponse(CamelModel):
    token: str
    user: UserResponse

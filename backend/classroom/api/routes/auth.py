"""Auth Routes — signup, login and current-user lookup.

Invariants:
    - Signup always creates a student; admins are created by admins or the bootstrap script
    - Login answers 401 for unknown email and wrong password alike
"""

from fastapi import APIRouter, Depends, status

from classroom.api.dependencies import get_current_user, get_identity_service
from classroom.core.entities import User
from classroom.schemas.user import (
    AuthResponse, LoginRequest, SignupRequest, UserResponse,
)
from classroom.services.identity_service import IdentityService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: SignupRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """Create a student account and return an access token."""
    user, token = await identity.signup(body.email, body.password)
    return AuthResponse(token=token, user=UserResponse.from_entity(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    """Exchange credentials for an access token."""
    user, token = await identity.login(body.email, body.password)
    return AuthResponse(token=token, user=UserResponse.from_entity(user))


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return UserResponse.from_entity(user)

"""User Management Routes — admin-only CRUD over user accounts."""

from fastapi import APIRouter, Depends, status

from classroom.api.dependencies import get_identity_service, require_admin
from classroom.schemas.user import UserCreate, UserResponse, UserUpdate
from classroom.services.identity_service import IdentityService

router = APIRouter(
    prefix="/api/v1/users", tags=["users"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[UserResponse])
async def list_users(identity: IdentityService = Depends(get_identity_service)):
    return [UserResponse.from_entity(u) for u in await identity.list_users()]


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, identity: IdentityService = Depends(get_identity_service),
):
    user = await identity.create_user(body.email, body.password, body.role)
    return UserResponse.from_entity(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, identity: IdentityService = Depends(get_identity_service),
):
    return UserResponse.from_entity(await identity.get_user(user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    identity: IdentityService = Depends(get_identity_service),
):
    user = await identity.update_user(user_id, body.email, body.password, body.role)
    return UserResponse.from_entity(user)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str, identity: IdentityService = Depends(get_identity_service),
):
    await identity.delete_user(user_id)
    return {"message": "User deleted successfully"}

"""User and friend endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import users as user_store
from .thought_views import MessageResponse, PopulatedUserResponse, RequestModel, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


class UserCreateRequest(RequestModel):
    username: str | None = None
    email: str | None = None


class UserUpdateRequest(RequestModel):
    username: str | None = None
    email: str | None = None


@router.get("", response_model=list[PopulatedUserResponse])
async def list_users(session: AsyncSession = Depends(get_db)) -> list[PopulatedUserResponse]:
    """Return every user with thoughts and friends expanded."""
    populated_users = await user_store.list_users(session)
    return [PopulatedUserResponse.from_populated(item) for item in populated_users]


@router.get("/{user_id}", response_model=PopulatedUserResponse)
async def get_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
) -> PopulatedUserResponse:
    populated = await user_store.get_user(session, user_id)
    return PopulatedUserResponse.from_populated(populated)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    payload: UserCreateRequest | None = None,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    payload = payload or UserCreateRequest()
    user = await user_store.create_user(
        session,
        username=payload.username,
        email=payload.email,
    )
    return UserResponse.from_user(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    payload: UserUpdateRequest | None = None,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    payload = payload or UserUpdateRequest()
    user = await user_store.update_user(
        session,
        user_id,
        username=payload.username,
        email=payload.email,
    )
    return UserResponse.from_user(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Delete the user along with every thought posted under its username."""
    await user_store.delete_user(session, user_id)
    return MessageResponse(message="User deleted successfully")


@router.post("/{user_id}/friends/{friend_id}", response_model=MessageResponse)
async def add_friend(
    user_id: str,
    friend_id: str,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await user_store.add_friend(session, user_id, friend_id)
    return MessageResponse(message="Friend added successfully")


@router.delete("/{user_id}/friends/{friend_id}", response_model=MessageResponse)
async def remove_friend(
    user_id: str,
    friend_id: str,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await user_store.remove_friend(session, user_id, friend_id)
    return MessageResponse(message="Friend removed successfully")

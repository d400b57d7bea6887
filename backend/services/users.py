"""User store operations."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation, unique_violation_field
from models import Thought, User
from .consistency import cascade_delete_thoughts_by_username
from .errors import NotFoundError, StoreError, ValidationError, translate_store_errors
from .validation import validate_user_fields

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PopulatedUser:
    """A user with its ``thoughts`` and ``friends`` ids resolved to records."""

    user: User
    thoughts: list[Thought] = field(default_factory=list)
    friends: list[User] = field(default_factory=list)


def _in(column: Any, values: Sequence[str]) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column.in_(values))


async def _get_user_or_raise(session: AsyncSession, user_id: str) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


async def _commit_user_write(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if not is_unique_violation(exc):
            raise StoreError(str(exc)) from exc
        field_name = unique_violation_field(exc) or "username"
        raise ValidationError({field_name: f"{field_name} already exists"}) from exc


async def _load_thoughts(session: AsyncSession, thought_ids: set[str]) -> dict[str, Thought]:
    if not thought_ids:
        return {}
    result = await session.execute(
        select(Thought).where(_in(Thought.id, sorted(thought_ids)))
    )
    return {thought.id: thought for thought in result.scalars().all()}


async def _load_users(session: AsyncSession, user_ids: set[str]) -> dict[str, User]:
    if not user_ids:
        return {}
    result = await session.execute(select(User).where(_in(User.id, sorted(user_ids))))
    return {user.id: user for user in result.scalars().all()}


def _populate(
    user: User,
    thoughts_by_id: dict[str, Thought],
    users_by_id: dict[str, User],
) -> PopulatedUser:
    # Ids that no longer resolve are skipped; repeated ids resolve repeatedly.
    return PopulatedUser(
        user=user,
        thoughts=[
            thoughts_by_id[thought_id]
            for thought_id in user.thought_ids or []
            if thought_id in thoughts_by_id
        ],
        friends=[
            users_by_id[friend_id]
            for friend_id in user.friend_ids or []
            if friend_id in users_by_id
        ],
    )


@translate_store_errors
async def list_users(session: AsyncSession) -> list[PopulatedUser]:
    """Return every user with thoughts and friends expanded."""
    result = await session.execute(
        select(User).order_by(cast(Any, User.created_at), cast(Any, User.id))
    )
    users = list(result.scalars().all())
    users_by_id = {user.id: user for user in users}
    thought_ids = {thought_id for user in users for thought_id in user.thought_ids or []}
    thoughts_by_id = await _load_thoughts(session, thought_ids)
    return [_populate(user, thoughts_by_id, users_by_id) for user in users]


@translate_store_errors
async def get_user(session: AsyncSession, user_id: str) -> PopulatedUser:
    user = await _get_user_or_raise(session, user_id)
    thoughts_by_id = await _load_thoughts(session, set(user.thought_ids or []))
    users_by_id = await _load_users(session, set(user.friend_ids or []))
    return _populate(user, thoughts_by_id, users_by_id)


@translate_store_errors
async def create_user(
    session: AsyncSession,
    *,
    username: str | None,
    email: str | None,
) -> User:
    """Insert a user with empty thought and friend lists."""
    normalized_username, normalized_email = validate_user_fields(
        username=username,
        email=email,
    )
    user = User(username=normalized_username, email=normalized_email)
    session.add(user)
    await _commit_user_write(session)
    await session.refresh(user)
    return user


@translate_store_errors
async def update_user(
    session: AsyncSession,
    user_id: str,
    *,
    username: str | None = None,
    email: str | None = None,
) -> User:
    """Merge the given fields into an existing user.

    Thoughts keep the username they were created with; a rename is not
    propagated to them.
    """
    user = await _get_user_or_raise(session, user_id)
    normalized_username, normalized_email = validate_user_fields(
        username=username if username is not None else user.username,
        email=email if email is not None else user.email,
    )
    user.username = normalized_username
    user.email = normalized_email
    session.add(user)
    await _commit_user_write(session)
    await session.refresh(user)
    return user


@translate_store_errors
async def delete_user(session: AsyncSession, user_id: str) -> int:
    """Delete a user and every thought carrying its username.

    Returns the number of thoughts removed by the cascade. The cascade and the
    user delete are committed separately.
    """
    user = await _get_user_or_raise(session, user_id)
    username = user.username
    deleted_thoughts = await cascade_delete_thoughts_by_username(session, username)

    await session.delete(user)
    await session.commit()
    logger.info(
        "Deleted user",
        extra={"user_id": user_id, "username": username, "deleted_thoughts": deleted_thoughts},
    )
    return deleted_thoughts


async def _resolve_friend_pair(
    session: AsyncSession,
    user_id: str,
    friend_id: str,
) -> tuple[User, User]:
    user = await session.get(User, user_id)
    friend = await session.get(User, friend_id)
    if user is None or friend is None:
        raise NotFoundError("User or friend")
    return user, friend


@translate_store_errors
async def add_friend(session: AsyncSession, user_id: str, friend_id: str) -> User:
    """Append ``friend_id`` to the user's friends; the reverse edge is not added."""
    user, friend = await _resolve_friend_pair(session, user_id, friend_id)
    user.friend_ids = [*(user.friend_ids or []), friend.id]
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@translate_store_errors
async def remove_friend(session: AsyncSession, user_id: str, friend_id: str) -> User:
    """Drop the first occurrence of ``friend_id`` from the user's friends."""
    user, friend = await _resolve_friend_pair(session, user_id, friend_id)
    friend_ids = list(user.friend_ids or [])
    if friend.id in friend_ids:
        friend_ids.remove(friend.id)
        user.friend_ids = friend_ids
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user

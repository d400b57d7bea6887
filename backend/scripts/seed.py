"""Database seed script for local development.

Usage:
    uv run python scripts/seed.py

Environment overrides:
    SEED_USER_LIMIT=4   seed only the first N demo users (and their thoughts)

Writes go through the user and thought stores, so new thoughts are linked to
their authors exactly as API-created ones are. Re-running the script skips
users, thoughts and friendships that already exist.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core import configure_logging  # noqa: E402
from db.session import AsyncSessionMaker  # noqa: E402
from models import Thought, User  # noqa: E402
from services import thoughts as thought_store  # noqa: E402
from services import users as user_store  # noqa: E402

logger = logging.getLogger("scripts.seed")

USER_LIMIT_ENV = "SEED_USER_LIMIT"


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


@dataclass(frozen=True)
class SeedUser:
    username: str
    email: str


@dataclass(frozen=True)
class SeedThought:
    username: str
    text: str
    # (reaction author, reaction body) pairs
    reactions: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SeedPlan:
    users: list[SeedUser]
    thoughts: list[SeedThought]
    friendships: list[tuple[str, str]] = field(default_factory=list)


BASE_USERS: Sequence[SeedUser] = [
    SeedUser(username="demo_alex", email="alex@example.com"),
    SeedUser(username="demo_bella", email="bella@example.com"),
    SeedUser(username="demo_cara", email="cara@example.com"),
    SeedUser(username="demo_dan", email="dan@example.com"),
    SeedUser(username="demo_ella", email="ella@example.com"),
]

BASE_THOUGHTS: Sequence[SeedThought] = [
    SeedThought(
        username="demo_alex",
        text="Sunny days make every commute shorter.",
        reactions=(("demo_bella", "Agreed!"), ("demo_cara", "Except in August.")),
    ),
    SeedThought(
        username="demo_alex",
        text="Trying to read one book a week this year.",
    ),
    SeedThought(
        username="demo_bella",
        text="First latte art attempt looked like a potato.",
        reactions=(("demo_dan", "A delicious potato."),),
    ),
    SeedThought(
        username="demo_cara",
        text="Golden hour is the only hour.",
        reactions=(("demo_alex", "Share the photos!"),),
    ),
    SeedThought(
        username="demo_dan",
        text="Weekend ride: 80km and one flat tire.",
    ),
    SeedThought(
        username="demo_ella",
        text="Good typography is invisible.",
        reactions=(("demo_bella", "Until it is not."),),
    ),
]


def _parse_positive_int(raw_value: str | None, *, default: int | None, label: str) -> int | None:
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        parsed = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{label} must be an integer") from exc
    if parsed <= 0:
        raise ValueError(f"{label} must be positive")
    return parsed


def _build_seed_friendships(usernames: Sequence[str]) -> list[tuple[str, str]]:
    """Link each user to the next one in the ring; links are one-directional."""
    if len(usernames) < 2:
        return []

    friendships: set[tuple[str, str]] = set()
    total_users = len(usernames)
    for index, username in enumerate(usernames):
        friend = usernames[(index + 1) % total_users]
        if friend != username:
            friendships.add((username, friend))
    return sorted(friendships)


def build_seed_plan(user_limit: int | None = None) -> SeedPlan:
    users = list(BASE_USERS[:user_limit] if user_limit else BASE_USERS)
    usernames = {user.username for user in users}
    thoughts = [
        SeedThought(
            username=thought.username,
            text=thought.text,
            reactions=tuple(
                reaction for reaction in thought.reactions if reaction[0] in usernames
            ),
        )
        for thought in BASE_THOUGHTS
        if thought.username in usernames
    ]
    return SeedPlan(
        users=users,
        thoughts=thoughts,
        friendships=_build_seed_friendships([user.username for user in users]),
    )


async def get_or_create_user(session: AsyncSession, payload: SeedUser) -> User:
    result = await session.execute(select(User).where(_eq(User.username, payload.username)))
    user = result.scalar_one_or_none()
    if user:
        return user
    return await user_store.create_user(session, username=payload.username, email=payload.email)


async def ensure_thoughts(session: AsyncSession, thoughts: Sequence[SeedThought]) -> int:
    created = 0
    for seed_thought in thoughts:
        result = await session.execute(
            select(Thought).where(
                _eq(Thought.username, seed_thought.username),
                _eq(Thought.thought_text, seed_thought.text),
            )
        )
        if result.scalar_one_or_none():
            continue

        thought = await thought_store.create_thought(
            session,
            thought_text=seed_thought.text,
            username=seed_thought.username,
        )
        for reaction_author, reaction_body in seed_thought.reactions:
            await thought_store.add_reaction(
                session,
                thought.id,
                reaction_body=reaction_body,
                username=reaction_author,
            )
        created += 1
    return created


async def ensure_friendships(
    session: AsyncSession,
    users: dict[str, User],
    friendships: Sequence[tuple[str, str]],
) -> None:
    for username, friend_username in friendships:
        user = users[username]
        friend = users[friend_username]
        if friend.id in (user.friend_ids or []):
            continue
        users[username] = await user_store.add_friend(session, user.id, friend.id)


async def seed(session: AsyncSession, plan: SeedPlan) -> dict[str, int]:
    users: dict[str, User] = {}
    for payload in plan.users:
        user = await get_or_create_user(session, payload)
        users[user.username] = user

    created_thoughts = await ensure_thoughts(session, plan.thoughts)
    await ensure_friendships(session, users, plan.friendships)
    return {
        "users": len(users),
        "thoughts_created": created_thoughts,
        "friendships": len(plan.friendships),
    }


async def main() -> None:
    configure_logging()
    user_limit = _parse_positive_int(
        os.getenv(USER_LIMIT_ENV),
        default=None,
        label=USER_LIMIT_ENV,
    )
    plan = build_seed_plan(user_limit)

    async with AsyncSessionMaker() as session:
        summary = await seed(session, plan)

    logger.info("Seed data inserted", extra=summary)
    print("Seed data inserted.")
    print("   Users:", ", ".join(user.username for user in plan.users))
    print("   New thoughts:", summary["thoughts_created"])
    print("   Friendships:", summary["friendships"])


if __name__ == "__main__":
    asyncio.run(main())

"""Cross-entity side effects shared by the user and thought stores.

Both helpers match on the denormalized ``username`` carried by thoughts rather
than on user ids. Renaming a user therefore detaches their existing thoughts
from later cascades; nothing here tries to repair that drift.

Each helper commits its own write. A caller that performs a second write
afterwards (for example deleting the user row) gets no atomicity across the
two commits, and a failure in between is not compensated.
"""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Thought, User

logger = logging.getLogger(__name__)


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


async def cascade_delete_thoughts_by_username(
    session: AsyncSession,
    username: str,
) -> int:
    """Delete every thought authored under ``username`` and return how many went.

    Thoughts created under the same username while this runs may or may not
    be included.
    """
    result = await session.execute(
        delete(Thought).where(_eq(Thought.username, username))
    )
    await session.commit()
    deleted_rows = int(getattr(result, "rowcount", 0) or 0)
    logger.info(
        "Cascade deleted thoughts",
        extra={"username": username, "deleted_rows": deleted_rows},
    )
    return deleted_rows


async def link_thought_to_author(
    session: AsyncSession,
    username: str,
    thought_id: str,
) -> bool:
    """Append ``thought_id`` to the user named ``username``.

    Returns False without raising when no user has that exact username.
    """
    result = await session.execute(select(User).where(_eq(User.username, username)))
    author = result.scalar_one_or_none()
    if author is None:
        logger.info(
            "No author found for thought",
            extra={"username": username, "thought_id": thought_id},
        )
        return False

    author.thought_ids = [*(author.thought_ids or []), thought_id]
    session.add(author)
    await session.commit()
    return True

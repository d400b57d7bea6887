"""Thought and reaction store operations."""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Reaction, Thought
from .consistency import link_thought_to_author
from .errors import NotFoundError, translate_store_errors
from .validation import validate_reaction_fields, validate_thought_fields

logger = logging.getLogger(__name__)


async def _get_thought_or_raise(session: AsyncSession, thought_id: str) -> Thought:
    thought = await session.get(Thought, thought_id)
    if thought is None:
        raise NotFoundError("Thought")
    return thought


@translate_store_errors
async def list_thoughts(session: AsyncSession) -> list[Thought]:
    result = await session.execute(
        select(Thought).order_by(cast(Any, Thought.created_at), cast(Any, Thought.id))
    )
    return list(result.scalars().all())


@translate_store_errors
async def get_thought(session: AsyncSession, thought_id: str) -> Thought:
    return await _get_thought_or_raise(session, thought_id)


@translate_store_errors
async def create_thought(
    session: AsyncSession,
    *,
    thought_text: str | None,
    username: str | None,
) -> Thought:
    """Persist a thought, then append its id to the author named ``username``.

    A missing author is not an error: the thought is still returned.
    """
    normalized_text, normalized_username = validate_thought_fields(
        thought_text=thought_text,
        username=username,
    )
    thought = Thought(thought_text=normalized_text, username=normalized_username)
    session.add(thought)
    await session.commit()
    await session.refresh(thought)

    await link_thought_to_author(session, normalized_username, thought.id)
    return thought


@translate_store_errors
async def update_thought(
    session: AsyncSession,
    thought_id: str,
    *,
    thought_text: str | None = None,
    username: str | None = None,
) -> Thought:
    """Merge the given fields into an existing thought.

    Changing ``username`` does not move the thought between users' lists.
    """
    thought = await _get_thought_or_raise(session, thought_id)
    normalized_text, normalized_username = validate_thought_fields(
        thought_text=thought_text if thought_text is not None else thought.thought_text,
        username=username if username is not None else thought.username,
    )
    thought.thought_text = normalized_text
    thought.username = normalized_username
    session.add(thought)
    await session.commit()
    await session.refresh(thought)
    return thought


@translate_store_errors
async def delete_thought(session: AsyncSession, thought_id: str) -> None:
    """Delete a thought.

    The author's ``thought_ids`` keeps the id; user reads skip it when the
    thought no longer resolves.
    """
    thought = await _get_thought_or_raise(session, thought_id)
    await session.delete(thought)
    await session.commit()


@translate_store_errors
async def add_reaction(
    session: AsyncSession,
    thought_id: str,
    *,
    reaction_body: str | None,
    username: str | None,
) -> Thought:
    """Append a new reaction to the thought and return the updated thought."""
    thought = await _get_thought_or_raise(session, thought_id)
    normalized_body, normalized_username = validate_reaction_fields(
        reaction_body=reaction_body,
        username=username,
    )
    reaction = Reaction(reaction_body=normalized_body, username=normalized_username)
    thought.reactions = [*(thought.reactions or []), reaction.to_document()]
    session.add(thought)
    await session.commit()
    await session.refresh(thought)
    return thought


@translate_store_errors
async def remove_reaction(
    session: AsyncSession,
    thought_id: str,
    reaction_id: str,
) -> Reaction:
    """Remove one reaction from the thought and return it."""
    thought = await _get_thought_or_raise(session, thought_id)
    reactions = thought.reaction_items()
    removed = next((reaction for reaction in reactions if reaction.id == reaction_id), None)
    if removed is None:
        raise NotFoundError("Reaction")

    thought.reactions = [
        reaction.to_document() for reaction in reactions if reaction.id != reaction_id
    ]
    session.add(thought)
    await session.commit()
    logger.info(
        "Removed reaction",
        extra={
            "thought_id": thought_id,
            "reaction_id": reaction_id,
            "remaining_reactions": len(thought.reactions),
        },
    )
    return removed

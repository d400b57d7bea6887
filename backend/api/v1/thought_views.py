"""Request and response models plus rendering helpers shared by user and thought routes."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from models import Reaction, Thought, User
from services.users import PopulatedUser


def format_timestamp(value: datetime, tz: tzinfo | None = None) -> str:
    """Render a timestamp like ``10/19/2026, 3:04:05 PM`` in local time.

    Naive values are read back from SQLite without an offset and are UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local_value = value.astimezone(tz)
    hour = local_value.hour % 12 or 12
    meridiem = "AM" if local_value.hour < 12 else "PM"
    return (
        f"{local_value.month}/{local_value.day}/{local_value.year}, "
        f"{hour}:{local_value.minute:02d}:{local_value.second:02d} {meridiem}"
    )


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Request body; numeric values are read as their string form."""

    @model_validator(mode="before")
    @classmethod
    def _numbers_as_strings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: str(value)
            if isinstance(value, (int, float)) and not isinstance(value, bool)
            else value
            for key, value in data.items()
        }


class MessageResponse(BaseModel):
    message: str


class ReactionResponse(CamelModel):
    id: str
    reaction_body: str
    username: str
    created_at: str

    @classmethod
    def from_reaction(cls, reaction: Reaction) -> "ReactionResponse":
        return cls(
            id=reaction.id,
            reaction_body=reaction.reaction_body,
            username=reaction.username,
            created_at=format_timestamp(reaction.created_at),
        )


class ThoughtResponse(CamelModel):
    id: str
    thought_text: str
    username: str
    created_at: str
    reactions: list[ReactionResponse]
    reaction_count: int

    @classmethod
    def from_thought(cls, thought: Thought) -> "ThoughtResponse":
        reactions = [ReactionResponse.from_reaction(item) for item in thought.reaction_items()]
        return cls(
            id=thought.id,
            thought_text=thought.thought_text,
            username=thought.username,
            created_at=format_timestamp(thought.created_at),
            reactions=reactions,
            reaction_count=thought.reaction_count,
        )


class UserResponse(CamelModel):
    """User with ``thoughts`` and ``friends`` left as id lists."""

    id: str
    username: str
    email: str
    thoughts: list[str]
    friends: list[str]
    friend_count: int

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            thoughts=list(user.thought_ids or []),
            friends=list(user.friend_ids or []),
            friend_count=user.friend_count,
        )


class PopulatedUserResponse(CamelModel):
    """User with ``thoughts`` and ``friends`` expanded one level deep."""

    id: str
    username: str
    email: str
    thoughts: list[ThoughtResponse]
    friends: list[UserResponse]
    friend_count: int

    @classmethod
    def from_populated(cls, populated: PopulatedUser) -> "PopulatedUserResponse":
        user = populated.user
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            thoughts=[ThoughtResponse.from_thought(thought) for thought in populated.thoughts],
            friends=[UserResponse.from_user(friend) for friend in populated.friends],
            friend_count=user.friend_count,
        )

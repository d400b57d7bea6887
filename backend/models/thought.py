"""Thought domain model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Index, String, func, text
from sqlmodel import Field, SQLModel

from .reaction import Reaction


class Thought(SQLModel, table=True):
    """Short post authored under a username, embedding its reactions."""

    __tablename__ = "thoughts"
    __table_args__ = (
        Index("ix_thoughts_username", "username"),
        Index("ix_thoughts_created_at", "created_at"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), sa_column=Column(String(36), primary_key=True))
    thought_text: str = Field(
        sa_column=Column(String(280), nullable=False)
    )
    # Denormalized author name, not a foreign key to users.id.
    username: str = Field(
        sa_column=Column(String(255), nullable=False)
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    reactions: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, server_default=text("'[]'")),
    )

    @property
    def reaction_count(self) -> int:
        return len(self.reactions or [])

    def reaction_items(self) -> list[Reaction]:
        return [Reaction.from_document(document) for document in self.reactions or []]

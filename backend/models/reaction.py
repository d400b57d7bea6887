"""Reaction documents embedded in a thought."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reaction(BaseModel):
    """A reply stored inside its parent thought's ``reactions`` array.

    Reactions have no table of their own; their ids only need to be unique
    within the owning thought.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    reaction_body: str
    username: str
    created_at: datetime = Field(default_factory=_utcnow)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Reaction":
        return cls.model_validate(document)

"""SQLModel models package."""

from .reaction import Reaction
from .thought import Thought
from .user import User

__all__ = [
    "User",
    "Thought",
    "Reaction",
]

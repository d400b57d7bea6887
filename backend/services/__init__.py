"""Business logic services."""

from .consistency import cascade_delete_thoughts_by_username, link_thought_to_author
from .errors import (
    NotFoundError,
    StoreError,
    StoreOperationError,
    ValidationError,
    translate_store_errors,
)

__all__ = [
    "cascade_delete_thoughts_by_username",
    "link_thought_to_author",
    "NotFoundError",
    "StoreError",
    "StoreOperationError",
    "ValidationError",
    "translate_store_errors",
]

"""Typed errors raised by the user and thought stores."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Concatenate, ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class StoreOperationError(Exception):
    """Base class for errors surfaced by store operations."""


class NotFoundError(StoreOperationError):
    """A referenced id does not resolve to an existing entity."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class ValidationError(StoreOperationError):
    """Input failed a presence, length, format or uniqueness check."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(summary or "Validation failed")


class StoreError(StoreOperationError):
    """The underlying database failed in a way callers cannot correct."""


def translate_store_errors(
    operation: Callable[Concatenate[AsyncSession, P], Awaitable[R]],
) -> Callable[Concatenate[AsyncSession, P], Awaitable[R]]:
    """Roll back and re-raise database failures escaping ``operation`` as StoreError."""

    @functools.wraps(operation)
    async def wrapper(session: AsyncSession, *args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await operation(session, *args, **kwargs)
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception(
                "Store operation failed",
                extra={"operation": operation.__name__},
            )
            raise StoreError(str(exc)) from exc

    return wrapper


__all__ = [
    "NotFoundError",
    "StoreError",
    "StoreOperationError",
    "ValidationError",
    "translate_store_errors",
]

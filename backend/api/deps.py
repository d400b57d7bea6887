"""Shared FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_session


async def get_db() -> AsyncIterator[AsyncSession]:
    """Provide a request-scoped database session."""
    async for session in get_session():
        yield session

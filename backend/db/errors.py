"""Database error helpers."""

from __future__ import annotations

import re

from sqlalchemy.exc import IntegrityError

# SQLite: "UNIQUE constraint failed: users.email"
_SQLITE_UNIQUE_PATTERN = re.compile(r"unique constraint failed: (?:\w+\.)?(\w+)")
# PostgreSQL: 'Key (email)=(a@x.com) already exists.'
_POSTGRES_KEY_PATTERN = re.compile(r"key \((\w+)\)=")
# PostgreSQL constraint names follow the "ix_<table>_<column>" convention.
_POSTGRES_CONSTRAINT_PATTERN = re.compile(r'constraint "(?:ix|uq)_[a-z]+_(\w+)"')


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError indicates a unique-constraint conflict."""
    original = getattr(error, "orig", None)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == "23505":
        return True
    message = str(original or error).lower()
    return "duplicate key" in message or "unique constraint" in message


def unique_violation_field(error: IntegrityError) -> str | None:
    """Return the column named by a unique-constraint violation, if recognisable."""
    message = str(getattr(error, "orig", None) or error).lower()
    for pattern in (_SQLITE_UNIQUE_PATTERN, _POSTGRES_KEY_PATTERN, _POSTGRES_CONSTRAINT_PATTERN):
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


__all__ = ["is_unique_violation", "unique_violation_field"]

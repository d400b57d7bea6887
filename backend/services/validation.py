"""Field checks applied before users, thoughts and reactions are persisted."""

from __future__ import annotations

import re
from typing import cast

from .errors import ValidationError

MAX_USERNAME_LENGTH = 255
MAX_EMAIL_LENGTH = 255
MAX_THOUGHT_TEXT_LENGTH = 280
MAX_REACTION_BODY_LENGTH = 280
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_missing(value: str | None) -> bool:
    return value is None or value == ""


def _check_username(errors: dict[str, str], username: str | None) -> None:
    if _is_missing(username):
        errors["username"] = "username is required"
    elif len(username or "") > MAX_USERNAME_LENGTH:
        errors["username"] = f"username must be at most {MAX_USERNAME_LENGTH} characters"


def validate_user_fields(*, username: str | None, email: str | None) -> tuple[str, str]:
    """Return the trimmed username and the email, or raise ValidationError."""
    errors: dict[str, str] = {}

    normalized_username = username.strip() if username is not None else None
    _check_username(errors, normalized_username)

    if _is_missing(email):
        errors["email"] = "email is required"
    elif len(email or "") > MAX_EMAIL_LENGTH:
        errors["email"] = f"email must be at most {MAX_EMAIL_LENGTH} characters"
    elif not EMAIL_PATTERN.match(email or ""):
        errors["email"] = "email must be a valid address"

    if errors:
        raise ValidationError(errors)
    return cast(str, normalized_username), cast(str, email)


def validate_thought_fields(*, thought_text: str | None, username: str | None) -> tuple[str, str]:
    errors: dict[str, str] = {}

    if _is_missing(thought_text):
        errors["thoughtText"] = "thoughtText is required"
    elif len(thought_text or "") > MAX_THOUGHT_TEXT_LENGTH:
        errors["thoughtText"] = (
            f"thoughtText must be at most {MAX_THOUGHT_TEXT_LENGTH} characters"
        )

    _check_username(errors, username)

    if errors:
        raise ValidationError(errors)
    return cast(str, thought_text), cast(str, username)


def validate_reaction_fields(*, reaction_body: str | None, username: str | None) -> tuple[str, str]:
    errors: dict[str, str] = {}

    if _is_missing(reaction_body):
        errors["reactionBody"] = "reactionBody is required"
    elif len(reaction_body or "") > MAX_REACTION_BODY_LENGTH:
        errors["reactionBody"] = (
            f"reactionBody must be at most {MAX_REACTION_BODY_LENGTH} characters"
        )

    _check_username(errors, username)

    if errors:
        raise ValidationError(errors)
    return cast(str, reaction_body), cast(str, username)

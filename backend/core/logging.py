"""Process-wide logging setup."""

from __future__ import annotations

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    resolved_level = (level or settings.log_level).upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved_level, format=LOG_FORMAT)
    root.setLevel(resolved_level)
    # SQL statement logging is driven by DATABASE_ECHO instead.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

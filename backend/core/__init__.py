"""Core configuration package."""

from .config import Settings, get_settings, settings
from .logging import configure_logging

__all__ = ["Settings", "configure_logging", "get_settings", "settings"]

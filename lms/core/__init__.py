"""Core app configuration, database and errors."""

from lms.core.config import get_settings, settings
from lms.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]

"""Core app configuration, database, and security."""

from bookstore.core.config import Settings, get_settings
from bookstore.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]

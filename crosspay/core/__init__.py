"""
Core module containing configuration, errors, and database connection.

This module provides:
    - config: Application settings and environment variable management
    - database: Database connection and session management
    - errors: Exception taxonomy and JSON error handlers
"""

from crosspay.core.config import Settings, get_settings, settings
from crosspay.core.database import Base, engine, get_db

__all__ = ["Settings", "get_settings", "settings", "get_db", "engine", "Base"]

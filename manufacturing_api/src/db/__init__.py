"""
Database package initializer exposing key public interfaces for configuration
and engine/session management.
"""

from .base import Base, utcnow
from .config import get_settings, Settings
from .session import (
    enable_sqlite_foreign_keys,
    get_async_session,
    get_engine,
    make_session_maker,
)

# Import models to ensure they are registered with SQLAlchemy metadata
# when the db package is imported.
from . import models as models  # noqa: F401

__all__ = [
    "Base",
    "utcnow",
    "Settings",
    "get_settings",
    "get_engine",
    "get_async_session",
    "make_session_maker",
    "enable_sqlite_foreign_keys",
    "models",
]

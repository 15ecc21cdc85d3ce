"""
Database session management
"""

from .async_db import (
    check_db_connection,
    dispose_engine,
    get_async_db,
    get_async_db_context,
    get_async_engine,
    get_session_factory,
)

__all__ = [
    "check_db_connection",
    "dispose_engine",
    "get_async_db",
    "get_async_db_context",
    "get_async_engine",
    "get_session_factory",
]

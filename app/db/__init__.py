"""
Database connection and session management.

Exports:
    - create_db_engine: Build an engine with NullPool (pgBouncer handles pooling)
    - create_session_factory: Session factory bound to an engine
    - get_engine / get_session_factory: Lazily-built defaults from settings
    - get_db: FastAPI dependency for route handlers (auto-commit)
    - get_db_session: Context manager with auto-commit (for scripts/jobs)
"""

from .engine import (
    create_db_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
    get_db,
    get_db_session,
)

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_db_session",
]

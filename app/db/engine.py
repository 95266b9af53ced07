"""
Database connection and session management.

Uses synchronous SQLAlchemy with NullPool pattern.
Connection pooling delegated to pgBouncer at infrastructure level.

The engine is an explicitly owned handle: reporting services receive a
Session built from it and never reach for a module-level connection.
The default engine is built lazily on first use, so importing this module
does not open a connection.
"""

from typing import Generator, Optional
from contextlib import contextmanager
from urllib.parse import urlparse
from sqlmodel import Session, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool
from sqlalchemy.orm import sessionmaker
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the reporting database.

    Args:
        database_url: Connection URL (defaults to settings.DATABASE_URL_POOLED)
        echo: Log SQL statements (defaults to settings.DEBUG)

    Returns:
        Engine configured with NullPool (pgBouncer handles pooling)

    Raises:
        ValueError: If no database URL is configured
    """
    database_url = database_url or settings.DATABASE_URL_POOLED
    if not database_url:
        raise ValueError("DATABASE_URL_POOLED environment variable is not set")

    # Transform plain postgresql:// URL to psycopg driver format (sync psycopg3)
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+psycopg://")

    # Parse database URL for logging (don't log password!)
    db_url = urlparse(database_url)
    logger.info("Configuring reporting database engine")
    logger.info(f"  - Database host: {db_url.hostname}")
    logger.info(f"  - Database port: {db_url.port}")
    logger.info(f"  - Database name: {db_url.path[1:]}")

    return create_engine(
        database_url,
        poolclass=NullPool,      # Let pgBouncer handle all pooling
        pool_pre_ping=True,      # Still verify connections before use
        echo=settings.DEBUG if echo is None else echo,
        connect_args={
            "prepare_threshold": None  # Disable prepared statements for pgBouncer transaction mode
        }
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    Build a Session factory bound to an engine.

    expire_on_commit=False keeps generated statements readable after the
    insert commits; autoflush=False leaves flushing to the caller.
    """
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def get_engine() -> Engine:
    """Return the default engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker:
    """Return the default Session factory, creating it on first use."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """
    Get database session for FastAPI dependency injection.

    Auto-commits on success, auto-rolls back on exception.

    Usage in FastAPI routes:
        @router.get("/statements/{statement_id}")
        def get_statement(statement_id: UUID, db: Session = Depends(get_db)):
            return FinancialStatementOperations.get_by_id(db, statement_id)

    Yields:
        Session: Database session from the default factory
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions with auto-commit.

    Auto-commits on success, auto-rolls back on exception.
    Use this for scripts and batch report generation.

    Usage:
        from app.db import get_db_session

        with get_db_session() as session:
            generator = StatementGenerator(session)
            statement = generator.generate_monthly_statement(brand_id, "brand", 2025, 3)

    Yields:
        Session: Database session
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

"""
Database engine configuration.

Creates SQLAlchemy engine with appropriate settings for SQLite or PostgreSQL.
"""

from pathlib import Path

from sqlalchemy import create_engine, make_url
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from admin_setup.config import Settings, get_settings
from admin_setup.core import StorageError, get_logger

logger = get_logger(__name__)

_engine: Engine | None = None


def ensure_sqlite_directory(database_url: str) -> Path | None:
    """
    Create the parent directory of a file-backed SQLite database.

    Returns the directory when it had to be created. In-memory URLs
    (``sqlite://``, ``sqlite:///:memory:``) have no file and are skipped.
    """
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return None

    db_dir = Path(database).parent
    if db_dir.exists():
        return None

    db_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created database directory: {db_dir}")
    return db_dir


def get_engine(settings: Settings | None = None) -> Engine:
    """
    Get or create the database engine.

    Returns cached engine instance, creating it on first call.
    Handles SQLite-specific configuration (connect_args, directory creation).
    """
    global _engine

    if _engine is not None:
        return _engine

    settings = settings or get_settings()
    database_url = settings.database_url

    if settings.is_sqlite:
        ensure_sqlite_directory(database_url)

        _engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
            pool_pre_ping=True,
        )
    else:
        # PostgreSQL or other databases
        _engine = create_engine(
            database_url,
            echo=settings.debug,
            pool_pre_ping=True,
        )

    logger.debug(
        "Database engine created",
        data={"dialect": _engine.dialect.name, "debug": settings.debug},
    )

    return _engine


def init_database() -> None:
    """Create any missing tables from model metadata."""
    # Import models so they register on Base.metadata
    from admin_setup.db import models  # noqa: F401
    from admin_setup.db.base import Base

    try:
        Base.metadata.create_all(get_engine())
    except SQLAlchemyError as e:
        raise StorageError("Failed to create database tables", details={"error": str(e)}) from e
    logger.info("Database tables ensured")


def dispose_engine() -> None:
    """Dispose of the engine and release all connections."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.debug("Database engine disposed")

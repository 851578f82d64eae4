"""
Database session management.

Provides the session factory and a scope that turns driver failures into
``StorageError``.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from admin_setup.core import StorageError, get_logger
from admin_setup.db.engine import get_engine

logger = get_logger(__name__)

_session_factory: sessionmaker[Session] | None = None


def get_session_factory() -> sessionmaker[Session]:
    """
    Get or create the session factory.

    Returns cached factory instance, creating it on first call.
    """
    global _session_factory

    if _session_factory is None:
        engine = get_engine()
        _session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    return _session_factory


def reset_session_factory() -> None:
    """Drop the cached factory (used after the engine is disposed)."""
    global _session_factory
    _session_factory = None


@contextmanager
def session_scope(session: Session | None = None) -> Iterator[Session]:
    """
    Yield a session and map SQLAlchemy failures to ``StorageError``.

    Writes commit individually inside the repositories; on failure the
    pending work is rolled back and earlier commits are left in place.
    A session passed in by the caller is not closed on exit.

    Usage:
        with session_scope() as db:
            ensure_privileged_role(db)
    """
    owns_session = session is None
    db = session if session is not None else get_session_factory()()
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database operation failed", data={"error": str(e)})
        raise StorageError("Database operation failed", details={"error": str(e)}) from e
    finally:
        if owns_session:
            db.close()

"""Database models, engine, and session management."""

from admin_setup.db.base import Base, TimestampMixin
from admin_setup.db.engine import (
    dispose_engine,
    get_engine,
    init_database,
)
from admin_setup.db.models import Account, AliasRecord, Role
from admin_setup.db.session import get_session_factory, reset_session_factory, session_scope

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Engine
    "get_engine",
    "init_database",
    "dispose_engine",
    # Session
    "get_session_factory",
    "reset_session_factory",
    "session_scope",
    # Models
    "Account",
    "AliasRecord",
    "Role",
]

import gc
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from admin_setup.config import AdminConfig, get_settings
from admin_setup.db import Base, dispose_engine, reset_session_factory
from admin_setup.services import AccountService

ENV_VARS = (
    "ADMIN_USERNAME",
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
    "ADMIN_ALIAS",
    "ADMIN_RESET",
    "APP_ENV_LOCAL_SETUP",
    "DATABASE_URL",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_JSON",
    "LOG_FILE",
)


@pytest.fixture(scope="session")
def package_dir():
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def tmp_db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def engine(tmp_db_path):
    engine = create_engine(
        f"sqlite:///{tmp_db_path}",
        poolclass=NullPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    session = SessionLocal()
    yield session
    session.close()
    gc.collect()


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 2, 3, 4, 5)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def account_service(db_session):
    return AccountService(db_session)


@pytest.fixture
def make_config():
    """Build an AdminConfig with test defaults."""

    def _make(**overrides) -> AdminConfig:
        values = {
            "username": "Admin",
            "email": "admin@test",
            "password": "secret123",
            "alias": None,
            "reset": False,
            "local_setup_extras": False,
        }
        values.update(overrides)
        return AdminConfig(**values)

    return _make


@pytest.fixture
def count_rows(db_session):
    """Count rows of a model in the test database."""

    def _count(model) -> int:
        return db_session.execute(select(func.count()).select_from(model)).scalar_one()

    return _count


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the host environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
    dispose_engine()
    reset_session_factory()

"""
Tests for the setup-admin-user command.

Runs ``main()`` in-process against a temporary SQLite file configured via
environment variables.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from admin_setup.auth import verify_password
from admin_setup.cli import main
from admin_setup.config import get_settings
from admin_setup.core import ExitCode
from admin_setup.db.models import Account, AliasRecord, Role


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "data" / "admin.db"


@pytest.fixture
def admin_env(clean_env, db_file):
    clean_env.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    clean_env.setenv("ADMIN_EMAIL", "admin@test")
    clean_env.setenv("ADMIN_PASSWORD", "secret123")
    clean_env.setenv("ADMIN_ALIAS", "artuser")
    return clean_env


def invoke(*args: str) -> int:
    get_settings.cache_clear()
    return main(list(args))


def read_db(db_file):
    engine = create_engine(f"sqlite:///{db_file}", poolclass=NullPool)
    try:
        with Session(engine) as session:
            roles = session.execute(select(func.count()).select_from(Role)).scalar_one()
            aliases = session.execute(select(func.count()).select_from(AliasRecord)).scalar_one()
            accounts = session.execute(select(Account)).scalars().all()
            session.expunge_all()
            return roles, accounts, aliases
    finally:
        engine.dispose()


def test_missing_credentials_exit_before_touching_store(clean_env, db_file, capsys):
    clean_env.setenv("DATABASE_URL", f"sqlite:///{db_file}")

    code = invoke()

    captured = capsys.readouterr()
    assert code == ExitCode.CONFIGURATION
    assert "ADMIN_EMAIL and ADMIN_PASSWORD environment variables must be set." in captured.err
    assert "ADMIN USER SETUP" in captured.out
    assert not db_file.exists()


def test_invalid_boolean_is_configuration_error(admin_env, capsys):
    admin_env.setenv("ADMIN_RESET", "sometimes")

    assert invoke() == ExitCode.CONFIGURATION
    assert "Invalid configuration" in capsys.readouterr().err


def test_creates_admin_account(admin_env, db_file, capsys):
    code = invoke("--init-db")

    out = capsys.readouterr().out
    assert code == ExitCode.OK
    assert "User ranks not found." in out
    assert "Admin account created." in out

    roles, accounts, aliases = read_db(db_file)
    assert roles == 2
    assert len(accounts) == 1
    assert accounts[0].email == "admin@test"
    assert accounts[0].has_alias is True
    assert accounts[0].email_verified_at is not None
    assert aliases == 1


def test_second_run_makes_no_changes(admin_env, db_file, capsys):
    assert invoke("--init-db") == ExitCode.OK
    capsys.readouterr()
    admin_env.setenv("ADMIN_EMAIL", "changed@test")

    code = invoke()

    out = capsys.readouterr().out
    assert code == ExitCode.OK
    assert "Admin account [Admin] already exists." in out
    assert "No changes made to existing admin account." in out
    assert out.rstrip().endswith("Action completed.")

    roles, accounts, aliases = read_db(db_file)
    assert (roles, len(accounts), aliases) == (2, 1, 1)
    assert accounts[0].email == "admin@test"


def test_reset_changes_credentials(admin_env, db_file, capsys):
    assert invoke("--init-db") == ExitCode.OK
    admin_env.setenv("ADMIN_EMAIL", "new@test")
    admin_env.setenv("ADMIN_PASSWORD", "newpass")
    admin_env.setenv("ADMIN_RESET", "true")

    assert invoke() == ExitCode.OK

    assert "Updates complete." in capsys.readouterr().out
    _, accounts, _ = read_db(db_file)
    assert accounts[0].email == "new@test"
    assert verify_password("newpass", accounts[0].password_hash)


def test_missing_tables_is_storage_error(admin_env, capsys):
    code = invoke()

    assert code == ExitCode.FAILURE
    assert "Error [E2000]" in capsys.readouterr().err


def test_quiet_suppresses_progress(admin_env, capsys):
    assert invoke("--init-db", "--quiet") == ExitCode.OK
    assert capsys.readouterr().out == ""

"""Tests for account creation/update validation."""

from __future__ import annotations

from datetime import date

import pytest

from admin_setup.auth import verify_password
from admin_setup.core import (
    AccountNotFoundError,
    AccountServiceError,
    AccountValidationError,
    EmailTakenError,
    ErrorCode,
    ExitCode,
)
from admin_setup.db.repositories import create_role


@pytest.fixture
def role(db_session):
    return create_role(db_session, name="Admin", sort=1)


@pytest.fixture
def fields(role):
    return {
        "name": "Admin",
        "email": "Admin@Test",
        "password": "secret123",
        "role_id": role.id,
        "dob": {"day": "01", "month": "01", "year": "1970"},
    }


def test_create_hashes_password_and_keeps_email_as_given(account_service, fields):
    account = account_service.create_account(fields)

    assert account.id is not None
    assert account.email == "Admin@Test"
    assert account.password_hash != "secret123"
    assert verify_password("secret123", account.password_hash)
    assert account.dob == date(1970, 1, 1)
    assert account.has_alias is False
    assert account.email_verified_at is None


def test_create_accepts_date_objects(account_service, fields):
    fields["dob"] = date(1980, 2, 3)
    assert account_service.create_account(fields).dob == date(1980, 2, 3)


def test_create_rejects_invalid_email(account_service, fields):
    fields["email"] = "not-an-email"

    with pytest.raises(AccountValidationError) as exc_info:
        account_service.create_account(fields)

    err = exc_info.value
    assert err.code == ErrorCode.ACCOUNT_VALIDATION_ERROR
    assert err.exit_code == ExitCode.FAILURE
    assert [e["field"] for e in err.details["errors"]] == ["email"]


def test_create_rejects_bad_dob(account_service, fields):
    fields["dob"] = {"day": "31", "month": "02", "year": "1970"}

    with pytest.raises(AccountValidationError):
        account_service.create_account(fields)


def test_create_rejects_unknown_fields(account_service, fields):
    fields["is_superuser"] = True

    with pytest.raises(AccountValidationError):
        account_service.create_account(fields)


def test_create_rejects_unknown_role(account_service, fields):
    fields["role_id"] = 999

    with pytest.raises(AccountValidationError) as exc_info:
        account_service.create_account(fields)

    assert exc_info.value.details == {"role_id": 999}


def test_create_rejects_duplicate_email(account_service, fields):
    account_service.create_account(fields)
    fields["email"] = "ADMIN@test"

    with pytest.raises(EmailTakenError) as exc_info:
        account_service.create_account(fields)

    assert isinstance(exc_info.value, AccountServiceError)
    assert exc_info.value.code == ErrorCode.EMAIL_TAKEN


def test_update_changes_only_given_fields(account_service, fields):
    account = account_service.create_account(fields)

    updated = account_service.update_account(account.id, {"password": "newpass"})

    assert updated.email == "Admin@Test"
    assert verify_password("newpass", updated.password_hash)
    assert updated.name == "Admin"


def test_update_allows_keeping_own_email(account_service, fields):
    account = account_service.create_account(fields)

    updated = account_service.update_account(
        account.id, {"email": "admin@test", "password": "other"}
    )

    assert updated.email == "admin@test"


def test_update_missing_account(account_service):
    with pytest.raises(AccountNotFoundError) as exc_info:
        account_service.update_account(12345, {"password": "x"})

    assert exc_info.value.code == ErrorCode.ACCOUNT_NOT_FOUND


def test_update_rejects_empty_password(account_service, fields):
    account = account_service.create_account(fields)

    with pytest.raises(AccountValidationError):
        account_service.update_account(account.id, {"password": ""})


def test_custom_hasher_is_used(db_session, fields):
    from admin_setup.services import AccountService

    service = AccountService(db_session, hasher=lambda pw: f"plain:{pw}")

    assert service.create_account(fields).password_hash == "plain:secret123"

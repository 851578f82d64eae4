"""Account creation and update with field validation."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from admin_setup.auth import hash_password
from admin_setup.core import (
    AccountNotFoundError,
    AccountValidationError,
    EmailTakenError,
    StorageError,
    get_logger,
)
from admin_setup.db.models import Account
from admin_setup.db.repositories import (
    create_account,
    email_exists,
    get_account_by_id,
    get_role_by_id,
    update_account_credentials,
)

logger = get_logger(__name__)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


def _coerce_dob(value: Any) -> Any:
    """Accept ``{"day", "month", "year"}`` mappings as well as dates/ISO strings."""
    if isinstance(value, Mapping):
        try:
            return date(int(value["year"]), int(value["month"]), int(value["day"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid date of birth: {value}") from e
    return value


class AccountCreate(BaseModel):
    """Fields accepted when creating an account."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=191)
    email: str = Field(..., max_length=191, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    role_id: int
    dob: Annotated[date, BeforeValidator(_coerce_dob)]
    has_alias: bool = False


class AccountUpdate(BaseModel):
    """Fields accepted when updating an account. Omitted fields are kept."""

    model_config = ConfigDict(extra="forbid")

    email: str | None = Field(None, max_length=191, pattern=EMAIL_PATTERN)
    password: str | None = Field(None, min_length=1)


def _validation_details(exc: ValidationError) -> dict[str, Any]:
    return {
        "errors": [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
    }


class AccountService:
    """Validates and persists account changes."""

    def __init__(
        self,
        db: Session,
        hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self.db = db
        self._hash = hasher

    def create_account(self, fields: Mapping[str, Any]) -> Account:
        """
        Create an account from raw fields.

        Args:
            fields: name, email, password, role_id, dob and optional has_alias.

        Returns:
            The persisted Account.

        Raises:
            AccountValidationError: Fields are invalid or the role is unknown.
            EmailTakenError: Another account already uses the email.
            StorageError: The write failed.
        """
        try:
            data = AccountCreate.model_validate(dict(fields))
        except ValidationError as e:
            raise AccountValidationError(details=_validation_details(e)) from e

        if get_role_by_id(self.db, data.role_id) is None:
            raise AccountValidationError(
                "Unknown role", details={"role_id": data.role_id}
            )
        if email_exists(self.db, data.email):
            raise EmailTakenError()

        try:
            account = create_account(
                self.db,
                name=data.name,
                email=data.email,
                password_hash=self._hash(data.password),
                role_id=data.role_id,
                dob=data.dob,
                has_alias=data.has_alias,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise EmailTakenError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Failed to create account", details={"error": str(e)}) from e

        logger.info(
            "Account created",
            data={"account_id": account.id, "role_id": account.role_id},
        )
        return account

    def update_account(self, account_id: int, fields: Mapping[str, Any]) -> Account:
        """
        Update an account's email and/or password.

        Raises:
            AccountNotFoundError: No account with that id.
            AccountValidationError: Fields are invalid.
            EmailTakenError: The new email belongs to another account.
            StorageError: The write failed.
        """
        try:
            data = AccountUpdate.model_validate(dict(fields))
        except ValidationError as e:
            raise AccountValidationError(details=_validation_details(e)) from e

        account = get_account_by_id(self.db, account_id)
        if account is None:
            raise AccountNotFoundError()

        if data.email is not None and email_exists(
            self.db, data.email, exclude_account_id=account.id
        ):
            raise EmailTakenError()

        try:
            account = update_account_credentials(
                self.db,
                account,
                email=data.email,
                password_hash=self._hash(data.password) if data.password is not None else None,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise EmailTakenError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Failed to update account", details={"error": str(e)}) from e

        logger.info(
            "Account updated",
            data={
                "account_id": account.id,
                "fields": sorted(k for k, v in data.model_dump().items() if v is not None),
            },
        )
        return account

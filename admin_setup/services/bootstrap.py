"""
Admin account bootstrap.

Ensures the rank hierarchy and the single admin account exist. Safe to run
repeatedly: once the admin account exists, nothing changes unless a reset
is requested.

The flow is split into a pure decision step (``decide``) that returns an
intent, and an executor that applies the intent against the store and the
account service.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum

from sqlalchemy.orm import Session

from admin_setup.config import AdminConfig
from admin_setup.core import Clock, get_logger, utcnow
from admin_setup.db.models import Account, Role
from admin_setup.db.repositories import (
    count_roles,
    create_alias,
    create_role,
    list_accounts_by_role,
    list_roles,
    mark_email_verified,
    set_has_alias,
)
from admin_setup.services.account_service import AccountService

logger = get_logger(__name__)

ALIAS_SITE = "deviantart"
PLACEHOLDER_DOB = date(1970, 1, 1)

ADMIN_ROLE = {
    "name": "Admin",
    "description": "The site admin. Has the ability to view/edit any data on the site.",
    "sort": 1,
}
MEMBER_ROLE = {
    "name": "Member",
    "description": "A regular member of the site.",
    "sort": 0,
}

Echo = Callable[[str], None]


class IntentKind(str, Enum):
    """What the bootstrap will do to the admin account."""

    CREATE_ACCOUNT = "create_account"
    NO_OP = "no_op"
    RESET_CREDENTIALS = "reset_credentials"
    RESET_CREDENTIALS_WITH_EXTRAS = "reset_credentials_with_extras"


@dataclass(frozen=True)
class BootstrapIntent:
    """Decision produced by ``decide``."""

    kind: IntentKind
    attach_alias: bool = False


@dataclass(frozen=True)
class RoleInit:
    """Privileged role plus whether the default roles were just created."""

    role: Role
    created: bool


@dataclass(frozen=True)
class BootstrapOutcome:
    """Result of a bootstrap run."""

    intent: BootstrapIntent
    role: Role
    account: Account
    roles_created: bool = False
    alias_created: bool = False

    @property
    def changed(self) -> bool:
        return self.roles_created or self.intent.kind is not IntentKind.NO_OP


# =============================================================================
# Roles
# =============================================================================


def select_privileged_role(roles: Sequence[Role]) -> Role:
    """Highest ``sort`` wins; ties go to the lowest id."""
    if not roles:
        raise ValueError("No roles to choose from")
    return min(roles, key=lambda r: (-r.sort, r.id))


def ensure_privileged_role(db: Session) -> RoleInit:
    """
    Return the privileged role, creating the default hierarchy if none exists.

    With an empty roles table, Admin (sort=1) and Member (sort=0) are created
    in that order. Otherwise existing roles are never modified.
    """
    if count_roles(db) == 0:
        admin_role = create_role(db, **ADMIN_ROLE)
        create_role(db, **MEMBER_ROLE)
        logger.info("Default roles created", data={"admin_role_id": admin_role.id})
        return RoleInit(role=admin_role, created=True)

    role = select_privileged_role(list_roles(db))
    logger.debug("Using existing privileged role", data={"role_id": role.id, "sort": role.sort})
    return RoleInit(role=role, created=False)


# =============================================================================
# Account lookup
# =============================================================================


def find_account_by_role(db: Session, role: Role) -> Account | None:
    """First account (by id) holding ``role``, or None."""
    accounts = list_accounts_by_role(db, role.id)
    if not accounts:
        return None
    if len(accounts) > 1:
        logger.warning(
            "Multiple accounts hold the privileged role; using the first",
            data={"role_id": role.id, "account_ids": [a.id for a in accounts]},
        )
    return accounts[0]


# =============================================================================
# Decision
# =============================================================================


def decide(config: AdminConfig, account: Account | None) -> BootstrapIntent:
    """Pick the bootstrap action. Performs no I/O."""
    if account is None:
        return BootstrapIntent(IntentKind.CREATE_ACCOUNT, attach_alias=config.has_alias)
    if not config.reset:
        return BootstrapIntent(IntentKind.NO_OP)
    if not config.local_setup_extras:
        return BootstrapIntent(IntentKind.RESET_CREDENTIALS)
    return BootstrapIntent(
        IntentKind.RESET_CREDENTIALS_WITH_EXTRAS,
        attach_alias=config.has_alias and not account.has_alias,
    )


# =============================================================================
# Execution
# =============================================================================


class BootstrapExecutor:
    """Applies a ``BootstrapIntent`` to the store."""

    def __init__(
        self,
        db: Session,
        config: AdminConfig,
        account_service: AccountService,
        echo: Echo = print,
        clock: Clock = utcnow,
    ) -> None:
        self.db = db
        self.config = config
        self.account_service = account_service
        self.echo = echo
        self.clock = clock
        self.alias_created = False

    def apply(self, intent: BootstrapIntent, role: Role, account: Account | None) -> Account:
        """Run the steps for ``intent``; each write commits on its own."""
        if intent.kind is IntentKind.CREATE_ACCOUNT:
            return self._create(intent, role)

        if account is None:
            raise ValueError(f"{intent.kind.value} requires an existing account")

        self.echo(f"Admin account [{account.name}] already exists.")

        if intent.kind is IntentKind.NO_OP:
            self.echo("No changes made to existing admin account.")
        else:
            account = self._reset(intent, account)
            self.echo("Updates complete.")

        self.echo("Action completed.")
        return account

    def _create(self, intent: BootstrapIntent, role: Role) -> Account:
        self.echo(
            "Setting up admin account. This account will have access to all site data, "
            "please make sure to keep the email and password secret!"
        )

        account = self.account_service.create_account(
            {
                "name": self.config.username,
                "email": self.config.email,
                "role_id": role.id,
                "password": self.config.password,
                "dob": PLACEHOLDER_DOB,
                "has_alias": self.config.has_alias,
            }
        )

        # The admin account is always treated as verified on creation.
        mark_email_verified(self.db, account, self.clock())

        if intent.attach_alias:
            self._attach_alias(account)

        self.echo(
            "Admin account created. You can now log in with the registered email and password."
        )
        self.echo(
            "If necessary, you can run this command again to change the email address "
            "and password of the admin account."
        )
        return account

    def _reset(self, intent: BootstrapIntent, account: Account) -> Account:
        self.echo("Resetting email address and password for this account.")
        account = self.account_service.update_account(
            account.id,
            {"email": self.config.email, "password": self.config.password},
        )
        self.echo("Admin account email and password changed.")

        if intent.kind is IntentKind.RESET_CREDENTIALS_WITH_EXTRAS:
            if intent.attach_alias:
                self.echo("Adding user alias...")
                set_has_alias(self.db, account, True)
                self._attach_alias(account)
            self.echo("Marking email address as verified...")
            mark_email_verified(self.db, account, self.clock())

        return account

    def _attach_alias(self, account: Account) -> None:
        record = create_alias(
            self.db,
            account_id=account.id,
            alias=self.config.alias,
            site=ALIAS_SITE,
            is_primary=True,
            is_visible=True,
        )
        self.alias_created = True
        logger.info(
            "Alias attached",
            data={"account_id": account.id, "alias_id": record.id, "site": ALIAS_SITE},
        )


def run_bootstrap(
    config: AdminConfig,
    db: Session,
    account_service: AccountService | None = None,
    echo: Echo = print,
    clock: Clock = utcnow,
) -> BootstrapOutcome:
    """
    Ensure the admin role and account exist.

    Args:
        config: Resolved admin configuration.
        db: Database session.
        account_service: Service used to create/update the account.
        echo: Receives progress lines as they happen.
        clock: Source of verification timestamps.

    Returns:
        BootstrapOutcome describing what was done.

    Raises:
        StorageError: A database read or write failed.
        AccountServiceError: The account could not be created or updated.
    """
    account_service = account_service or AccountService(db)

    role_init = ensure_privileged_role(db)
    if role_init.created:
        echo("User ranks not found. Default user ranks (admin and basic member) created.")

    existing = find_account_by_role(db, role_init.role)
    intent = decide(config, existing)
    logger.info(
        "Bootstrap decision",
        data={
            "intent": intent.kind.value,
            "attach_alias": intent.attach_alias,
            "role_id": role_init.role.id,
            "account_id": existing.id if existing else None,
        },
    )

    executor = BootstrapExecutor(db, config, account_service, echo=echo, clock=clock)
    account = executor.apply(intent, role_init.role, existing)

    return BootstrapOutcome(
        intent=intent,
        role=role_init.role,
        account=account,
        roles_created=role_init.created,
        alias_created=executor.alias_created,
    )

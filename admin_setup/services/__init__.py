"""Business logic services."""

from admin_setup.services.account_service import AccountCreate, AccountService, AccountUpdate
from admin_setup.services.bootstrap import (
    BootstrapExecutor,
    BootstrapIntent,
    BootstrapOutcome,
    IntentKind,
    RoleInit,
    decide,
    ensure_privileged_role,
    find_account_by_role,
    run_bootstrap,
    select_privileged_role,
)

__all__ = [
    "AccountCreate",
    "AccountService",
    "AccountUpdate",
    "BootstrapExecutor",
    "BootstrapIntent",
    "BootstrapOutcome",
    "IntentKind",
    "RoleInit",
    "decide",
    "ensure_privileged_role",
    "find_account_by_role",
    "run_bootstrap",
    "select_privileged_role",
]
